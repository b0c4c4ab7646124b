# Copyright (C) Istituto Italiano di Tecnologia (IIT). All rights reserved.

import numpy as np
import numpy.typing as npt


class DegenerateModelError(ValueError):
    """Raised when the total mass of the model is not strictly positive"""


def check_vector(x: npt.ArrayLike, size: int, name: str) -> np.ndarray:
    """
    Args:
        x (npt.ArrayLike): the input vector
        size (int): the expected size
        name (str): the name of the vector, used in the error message

    Returns:
        np.ndarray: x as a 1D float array
    """
    x = np.asarray(x, dtype=float)
    if x.ndim != 1:
        raise ValueError(f"The {name} vector must be 1D, got shape {x.shape}")
    if x.shape[0] != size:
        raise ValueError(
            f"The {name} vector is not of right size: expected {size}, got {x.shape[0]}"
        )
    return x


def check_inputs(model, data, q, v=None, a=None):
    """Validates the call contract shared by all the algorithms

    Returns:
        the inputs converted to float arrays (None stays None)
    """
    if not model.check(data):
        raise ValueError("data is not consistent with model.")
    q = check_vector(q, model.nq, "configuration")
    if v is not None:
        v = check_vector(v, model.nv, "velocity")
    if a is not None:
        a = check_vector(a, model.nv, "acceleration")
    return q, v, a


def check_total_mass(mass: float) -> float:
    if not mass > 0.0:
        raise DegenerateModelError(
            f"The total mass of the model must be strictly positive, got {mass}"
        )
    return mass
