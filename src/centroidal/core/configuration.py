# Copyright (C) Istituto Italiano di Tecnologia (IIT). All rights reserved.

"""Operations on the configuration space of a model"""

from typing import Optional

import numpy as np
import numpy.typing as npt

from centroidal.core.check import check_vector


def neutral(model) -> np.ndarray:
    """
    Returns:
        np.ndarray: the configuration where every joint is at its identity placement
    """
    return np.concatenate(
        [np.zeros(0)] + [joint.neutral() for joint in model.joints[1:]]
    )


def integrate(model, q: npt.ArrayLike, v: npt.ArrayLike) -> np.ndarray:
    """
    Args:
        model (Model): the model
        q (npt.ArrayLike): configuration vector
        v (npt.ArrayLike): velocity vector, applied for a unit time

    Returns:
        np.ndarray: the configuration reached from q moving with the constant velocity v
    """
    q = check_vector(q, model.nq, "configuration")
    v = check_vector(v, model.nv, "velocity")
    q_next = np.empty(model.nq)
    for joint in model.joints[1:]:
        q_next[joint.idx_q : joint.idx_q + joint.nq] = joint.integrate(
            joint.joint_config_selector(q), joint.joint_velocity_selector(v)
        )
    return q_next


def random_configuration(
    model, rng: Optional[np.random.Generator] = None
) -> np.ndarray:
    """
    Args:
        model (Model): the model
        rng (np.random.Generator, optional): the random generator. Defaults to a fresh one.

    Returns:
        np.ndarray: a random valid configuration
    """
    rng = rng if rng is not None else np.random.default_rng()
    return np.concatenate(
        [np.zeros(0)] + [joint.random_configuration(rng) for joint in model.joints[1:]]
    )
