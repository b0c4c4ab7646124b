# Copyright (C) Istituto Italiano di Tecnologia (IIT). All rights reserved.

"""Centroidal dynamics: momentum of the whole system about its center of mass,
its time derivative and the centroidal momentum matrix with its time derivative.
"""

import numpy as np
import numpy.typing as npt

from centroidal.core.check import check_inputs, check_total_mass
from centroidal.core.kinematics import forward_kinematics
from centroidal.core.spatial_math import Force, Inertia


def _shift_to_com(F: np.ndarray, com: np.ndarray) -> None:
    """moves in place the angular rows of a 6 x k force matrix from the origin to com"""
    F[3:, :] += np.cross(F[:3, :], com, axisa=0).T


def _accumulate_subtrees(model, data, with_force: bool) -> None:
    """child-before-parent accumulation of mass, first moment of mass, momentum
    and, with_force, force residual into the root"""
    data.mass[0] = 0.0
    data.com[0] = np.zeros(3)
    data.h[0] = Force.zero()
    data.f[0] = Force.zero()

    for i in range(model.njoints - 1, 0, -1):
        parent = model.parents[i]
        liMi = data.liMi[i]
        data.mass[parent] += data.mass[i]
        data.com[parent] = (
            data.com[parent]
            + liMi.rotation @ data.com[i]
            + data.mass[i] * liMi.translation
        )
        data.h[parent] = data.h[parent] + liMi.act(data.h[i])
        if with_force:
            data.f[parent] = data.f[parent] + liMi.act(data.f[i])

    check_total_mass(data.mass[0])
    data.com[0] = data.com[0] / data.mass[0]


def _centroidal_force(f: Force, com: np.ndarray) -> Force:
    return Force(f.linear, f.angular + np.cross(f.linear, com))


def compute_centroidal_momentum(
    model, data, q: npt.ArrayLike, v: npt.ArrayLike
) -> Force:
    """
    Args:
        model (Model): the model
        data (Data): the data allocated for model
        q (npt.ArrayLike): configuration vector
        v (npt.ArrayLike): velocity vector

    Returns:
        Force: the centroidal momentum, also stored in data.hg
    """
    forward_kinematics(model, data, q, v)
    for i in range(1, model.njoints):
        Y = model.inertias[i]
        data.h[i] = Y * data.v[i]
        data.mass[i] = Y.mass
        data.com[i] = Y.mass * Y.lever

    _accumulate_subtrees(model, data, with_force=False)
    data.hg = _centroidal_force(data.h[0], data.com[0])
    return data.hg


def compute_centroidal_momentum_time_variation(
    model, data, q: npt.ArrayLike, v: npt.ArrayLike, a: npt.ArrayLike
) -> Force:
    """
    Args:
        model (Model): the model
        data (Data): the data allocated for model
        q (npt.ArrayLike): configuration vector
        v (npt.ArrayLike): velocity vector
        a (npt.ArrayLike): acceleration vector

    Returns:
        Force: the time derivative of the centroidal momentum, also stored in data.dhg.
            The centroidal momentum is stored in data.hg
    """
    forward_kinematics(model, data, q, v, a)
    for i in range(1, model.njoints):
        Y = model.inertias[i]
        data.h[i] = Y * data.v[i]
        data.f[i] = Y * data.a[i] + data.v[i].cross(data.h[i])
        data.mass[i] = Y.mass
        data.com[i] = Y.mass * Y.lever

    _accumulate_subtrees(model, data, with_force=True)
    data.hg = _centroidal_force(data.h[0], data.com[0])
    data.dhg = _centroidal_force(data.f[0], data.com[0])
    return data.dhg


def ccrba(model, data, q: npt.ArrayLike, v: npt.ArrayLike) -> np.ndarray:
    """Composite Rigid Body Algorithm for the centroidal momentum matrix

    Args:
        model (Model): the model
        data (Data): the data allocated for model
        q (npt.ArrayLike): configuration vector
        v (npt.ArrayLike): velocity vector

    Returns:
        np.ndarray: the 6 x nv centroidal momentum matrix Ag, also stored in data.Ag.
            data.hg, data.mass[0], data.com[0] and data.Ig are updated as well
    """
    q, v, _ = check_inputs(model, data, q, v)
    forward_kinematics(model, data, q)

    data.Ycrb[0] = Inertia.zero()
    for i in range(1, model.njoints):
        data.Ycrb[i] = model.inertias[i]

    for i in range(model.njoints - 1, 0, -1):
        joint = model.joints[i]
        parent = model.parents[i]
        data.Ycrb[parent] = data.Ycrb[parent] + data.liMi[i].act(data.Ycrb[i])
        joint.joint_cols(data.Ag)[:] = data.oMi[i].act_force_set(
            data.Ycrb[i].apply_set(data.joints[i].S)
        )

    mass = check_total_mass(data.Ycrb[0].mass)
    data.mass[0] = mass
    data.com[0] = data.Ycrb[0].lever
    _shift_to_com(data.Ag, data.com[0])

    data.hg = Force.from_vector(data.Ag @ v)
    data.Ig = Inertia(mass, np.zeros(3), data.Ycrb[0].inertia)
    return data.Ag


def dccrba(model, data, q: npt.ArrayLike, v: npt.ArrayLike) -> np.ndarray:
    """Time derivative of the centroidal momentum matrix, computed along with the matrix

    Args:
        model (Model): the model
        data (Data): the data allocated for model
        q (npt.ArrayLike): configuration vector
        v (npt.ArrayLike): velocity vector

    Returns:
        np.ndarray: the 6 x nv matrix dAg, also stored in data.dAg.
            data.Ag, data.hg, data.mass[0], data.com[0], data.vcom[0], data.J,
            data.dJ and data.Ig are updated as well
    """
    q, v, _ = check_inputs(model, data, q, v)
    forward_kinematics(model, data, q, v)

    data.oYcrb[0] = Inertia.zero()
    data.doYcrb[0] = np.zeros((6, 6))
    for i in range(1, model.njoints):
        data.oYcrb[i] = data.oMi[i].act(model.inertias[i])
        data.doYcrb[i] = data.oYcrb[i].variation(data.ov[i])

    for i in range(model.njoints - 1, 0, -1):
        joint = model.joints[i]
        parent = model.parents[i]
        jdata = data.joints[i]

        J_cols = joint.joint_cols(data.J)
        J_cols[:] = data.oMi[i].act_motion_set(jdata.S)
        dJ_cols = joint.joint_cols(data.dJ)
        dJ_cols[:] = data.ov[i].act_set(J_cols) + data.oMi[i].act_motion_set(jdata.dS)

        data.oYcrb[parent] = data.oYcrb[parent] + data.oYcrb[i]
        if parent > 0:
            data.doYcrb[parent] = data.doYcrb[parent] + data.doYcrb[i]

        Y = data.oYcrb[i]
        joint.joint_cols(data.Ag)[:] = Y.apply_set(J_cols)
        joint.joint_cols(data.dAg)[:] = data.doYcrb[i] @ J_cols + Y.apply_set(dJ_cols)

    mass = check_total_mass(data.oYcrb[0].mass)
    data.mass[0] = mass
    data.com[0] = data.oYcrb[0].lever
    # the linear rows do not depend on the reduction point
    data.vcom[0] = data.Ag[:3, :] @ v / mass

    # d/dt of the shift of Ag, the Ag_lin x vcom term vanishes once multiplied by v
    data.dAg[3:, :] += np.cross(data.Ag[:3, :], data.vcom[0], axisa=0).T
    _shift_to_com(data.dAg, data.com[0])
    _shift_to_com(data.Ag, data.com[0])

    data.hg = Force.from_vector(data.Ag @ v)
    data.Ig = Inertia(mass, np.zeros(3), data.oYcrb[0].inertia)
    return data.dAg
