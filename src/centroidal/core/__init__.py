# Copyright (C) Istituto Italiano di Tecnologia (IIT). All rights reserved.

from .check import DegenerateModelError
from .constants import UNIVERSE_NAME, JointType
from .spatial_math import SE3, Force, Inertia, Motion
from .joint import (
    Joint,
    JointComposite,
    JointData,
    JointFixed,
    JointFreeFlyer,
    JointPlanar,
    JointPrismatic,
    JointRevolute,
    JointSpherical,
)
from .kinematics import forward_kinematics
from .centroidal import (
    ccrba,
    compute_centroidal_momentum,
    compute_centroidal_momentum_time_variation,
    dccrba,
)
from .com import center_of_mass
from .configuration import integrate, neutral, random_configuration
