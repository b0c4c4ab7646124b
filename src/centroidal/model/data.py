# Copyright (C) Istituto Italiano di Tecnologia (IIT). All rights reserved.

from typing import List, Optional

import numpy as np

from centroidal.core.joint import JointData
from centroidal.core.spatial_math import SE3, Force, Inertia, Motion
from centroidal.model.model import Model


class Data:
    """Working buffers of the algorithms, allocated once for a Model.

    A Data is owned by the caller and passed to every algorithm, which overwrites the
    entries it is responsible for. Two concurrent calls must not share the same Data.

    Attributes:
        joints: kinematic quantities of each joint
        liMi: placement of joint i in the frame of its parent
        oMi: placement of joint i in the world frame
        v, a: spatial velocity and acceleration of joint i, in the joint frame
        ov: spatial velocity of joint i, in the world frame
        h, f: spatial momentum and force residual of body i (of the subtree after a backward pass)
        mass, com: subtree mass and center of mass. com[0] is always the world frame
            center of mass of the model; for i > 0 the centroidal passes leave the first
            moment of mass in the joint frame while center_of_mass leaves the world position
        vcom, acom: velocity and acceleration of the subtree center of mass
        Ycrb: composite inertia of the subtree rooted at joint i, in the joint frame
        oYcrb, doYcrb: composite inertia in the world frame and its time derivative
        J, dJ: 6 x nv world frame joint jacobian and its time derivative
        Ag, dAg: 6 x nv centroidal momentum matrix and its time derivative
        hg, dhg: centroidal momentum and its time derivative
        Ig: centroidal composite rigid body inertia
    """

    def __init__(self, model: Model) -> None:
        n = model.njoints
        self.signature = model.signature()
        self.joints: List[Optional[JointData]] = [None] * n
        self.liMi: List[SE3] = [SE3.identity() for _ in range(n)]
        self.oMi: List[SE3] = [SE3.identity() for _ in range(n)]
        self.v: List[Motion] = [Motion.zero() for _ in range(n)]
        self.a: List[Motion] = [Motion.zero() for _ in range(n)]
        self.ov: List[Motion] = [Motion.zero() for _ in range(n)]
        self.h: List[Force] = [Force.zero() for _ in range(n)]
        self.f: List[Force] = [Force.zero() for _ in range(n)]
        self.mass = np.zeros(n)
        self.com: List[np.ndarray] = [np.zeros(3) for _ in range(n)]
        self.vcom: List[np.ndarray] = [np.zeros(3) for _ in range(n)]
        self.acom: List[np.ndarray] = [np.zeros(3) for _ in range(n)]
        self.Ycrb: List[Inertia] = [Inertia.zero() for _ in range(n)]
        self.oYcrb: List[Inertia] = [Inertia.zero() for _ in range(n)]
        self.doYcrb: List[np.ndarray] = [np.zeros((6, 6)) for _ in range(n)]
        self.J = np.zeros((6, model.nv))
        self.dJ = np.zeros((6, model.nv))
        self.Ag = np.zeros((6, model.nv))
        self.dAg = np.zeros((6, model.nv))
        self.hg = Force.zero()
        self.dhg = Force.zero()
        self.Ig = Inertia.zero()

    @property
    def njoints(self) -> int:
        return len(self.joints)
