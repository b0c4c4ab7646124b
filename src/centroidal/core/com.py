# Copyright (C) Istituto Italiano di Tecnologia (IIT). All rights reserved.

from typing import Optional

import numpy as np
import numpy.typing as npt

from centroidal.core.check import check_total_mass
from centroidal.core.kinematics import forward_kinematics


def center_of_mass(
    model,
    data,
    q: npt.ArrayLike,
    v: Optional[npt.ArrayLike] = None,
    a: Optional[npt.ArrayLike] = None,
) -> np.ndarray:
    """Mass and center of mass of every subtree, expressed in the world frame

    Fills data.mass[i] and data.com[i] and, when v (and a) are given, the velocity
    data.vcom[i] (and the acceleration data.acom[i]) of the subtree center of mass.
    Entry 0 refers to the whole model. Massless subtrees get a zero center of mass.

    Args:
        model (Model): the model
        data (Data): the data allocated for model
        q (npt.ArrayLike): configuration vector
        v (npt.ArrayLike, optional): velocity vector
        a (npt.ArrayLike, optional): acceleration vector

    Returns:
        np.ndarray: the center of mass of the model
    """
    forward_kinematics(model, data, q, v, a)

    data.mass[0] = 0.0
    data.com[0] = np.zeros(3)
    data.vcom[0] = np.zeros(3)
    data.acom[0] = np.zeros(3)
    for i in range(1, model.njoints):
        Y = model.inertias[i]
        p = data.oMi[i].act(Y.lever)
        data.mass[i] = Y.mass
        data.com[i] = Y.mass * p
        if v is not None:
            ov = data.ov[i]
            vp = ov.linear + np.cross(ov.angular, p)
            data.vcom[i] = Y.mass * vp
        if a is not None:
            oa = data.oMi[i].act(data.a[i])
            data.acom[i] = Y.mass * (
                oa.linear + np.cross(oa.angular, p) + np.cross(ov.angular, vp)
            )

    for i in range(model.njoints - 1, 0, -1):
        parent = model.parents[i]
        data.mass[parent] += data.mass[i]
        data.com[parent] = data.com[parent] + data.com[i]
        if v is not None:
            data.vcom[parent] = data.vcom[parent] + data.vcom[i]
        if a is not None:
            data.acom[parent] = data.acom[parent] + data.acom[i]

    check_total_mass(data.mass[0])
    for i in range(model.njoints):
        if data.mass[i] <= 0.0:
            continue
        data.com[i] = data.com[i] / data.mass[i]
        if v is not None:
            data.vcom[i] = data.vcom[i] / data.mass[i]
        if a is not None:
            data.acom[i] = data.acom[i] / data.mass[i]
    return data.com[0]
