# Copyright (C) Istituto Italiano di Tecnologia (IIT). All rights reserved.

from centroidal.core import (
    SE3,
    DegenerateModelError,
    Force,
    Inertia,
    JointType,
    Motion,
    ccrba,
    center_of_mass,
    compute_centroidal_momentum,
    compute_centroidal_momentum_time_variation,
    dccrba,
    forward_kinematics,
)
from centroidal.model import Data, Model
from centroidal.numpy import KinDynComputations
