# Copyright (C) Istituto Italiano di Tecnologia (IIT). All rights reserved.

from enum import Enum


class JointType(str, Enum):
    """The closed set of supported joint kinds"""

    FIXED = "fixed"
    REVOLUTE = "revolute"
    PRISMATIC = "prismatic"
    SPHERICAL = "spherical"
    PLANAR = "planar"
    FREE_FLYER = "free_flyer"
    COMPOSITE = "composite"


# name of the fixed world frame, always the joint with id 0
UNIVERSE_NAME = "universe"

# URDF joint types and the kind they are mapped to
URDF_JOINT_TYPES = {
    "revolute": JointType.REVOLUTE,
    "continuous": JointType.REVOLUTE,
    "prismatic": JointType.PRISMATIC,
    "fixed": JointType.FIXED,
    "floating": JointType.FREE_FLYER,
    "planar": JointType.PLANAR,
}
