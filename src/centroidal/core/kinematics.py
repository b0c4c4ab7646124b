# Copyright (C) Istituto Italiano di Tecnologia (IIT). All rights reserved.

from typing import Optional

import numpy.typing as npt

from centroidal.core.check import check_inputs
from centroidal.core.spatial_math import SE3, Motion


def forward_kinematics(
    model,
    data,
    q: npt.ArrayLike,
    v: Optional[npt.ArrayLike] = None,
    a: Optional[npt.ArrayLike] = None,
) -> None:
    """Top-down pass: joint kinematics, placements and, when requested,
    spatial velocities and accelerations of every joint.

    Fills data.joints, data.liMi and data.oMi. With v it also fills data.v (local
    frame) and data.ov (world frame), with a it fills data.a (local frame).

    Args:
        model (Model): the model
        data (Data): the data allocated for model
        q (npt.ArrayLike): configuration vector
        v (npt.ArrayLike, optional): velocity vector
        a (npt.ArrayLike, optional): acceleration vector, it requires v
    """
    if a is not None and v is None:
        raise ValueError("The acceleration vector requires the velocity vector")
    q, v, a = check_inputs(model, data, q, v, a)

    data.oMi[0] = SE3.identity()
    data.v[0] = Motion.zero()
    data.a[0] = Motion.zero()
    data.ov[0] = Motion.zero()

    for i in range(1, model.njoints):
        joint = model.joints[i]
        parent = model.parents[i]
        jdata = joint.calc(q, v)
        data.joints[i] = jdata

        liMi = model.joint_placements[i] * jdata.M
        data.liMi[i] = liMi
        data.oMi[i] = data.oMi[parent] * liMi if parent > 0 else liMi

        if v is None:
            continue
        data.v[i] = jdata.v
        if parent > 0:
            data.v[i] = liMi.act_inv(data.v[parent]) + jdata.v
        data.ov[i] = data.oMi[i].act(data.v[i])

        if a is None:
            continue
        data.a[i] = (
            Motion.from_vector(jdata.S @ joint.joint_velocity_selector(a))
            + jdata.c
            + (data.v[i] ^ jdata.v)
        )
        if parent > 0:
            data.a[i] = data.a[i] + liMi.act_inv(data.a[parent])
