# Copyright (C) Istituto Italiano di Tecnologia (IIT). All rights reserved.

import numpy as np
import numpy.typing as npt
import urdf_parser_py.urdf

from centroidal.core.constants import URDF_JOINT_TYPES, JointType
from centroidal.core.joint import (
    Joint,
    JointFixed,
    JointFreeFlyer,
    JointPlanar,
    JointPrismatic,
    JointRevolute,
)
from centroidal.core.spatial_math import SE3
from centroidal.model.abc_factories import JointDescription, Pose


class StdJoint(JointDescription):
    """Standard Joint class"""

    def __init__(self, joint: urdf_parser_py.urdf.Joint) -> None:
        if joint.joint_type not in URDF_JOINT_TYPES:
            raise ValueError(
                f"The joint {joint.name} has the unsupported type {joint.joint_type}"
            )
        self.name = joint.name
        self.parent = joint.parent
        self.child = joint.child
        self.joint_type = URDF_JOINT_TYPES[joint.joint_type]
        self.axis = self._set_axis(joint.axis)
        self.origin = self._set_origin(joint.origin)

    def _set_axis(self, axis: npt.ArrayLike) -> np.ndarray:
        """
        Args:
            axis (npt.ArrayLike): axis

        Returns:
            np.ndarray: the joint axis, x if not specified
        """
        return np.array([1.0, 0.0, 0.0]) if axis is None else np.asarray(axis, dtype=float)

    def _set_origin(self, origin) -> Pose:
        if origin is None:
            return Pose.zero()
        return Pose(
            xyz=origin.xyz or [0.0, 0.0, 0.0], rpy=origin.rpy or [0.0, 0.0, 0.0]
        )

    @property
    def placement(self) -> SE3:
        return self.origin.placement()

    def build(self) -> Joint:
        """
        Returns:
            Joint: the joint model corresponding to the urdf joint
        """
        if self.joint_type == JointType.FIXED:
            return JointFixed(name=self.name)
        elif self.joint_type == JointType.REVOLUTE:
            return JointRevolute(self.axis, name=self.name)
        elif self.joint_type == JointType.PRISMATIC:
            return JointPrismatic(self.axis, name=self.name)
        elif self.joint_type == JointType.FREE_FLYER:
            return JointFreeFlyer(name=self.name)
        elif self.joint_type == JointType.PLANAR:
            # the urdf axis is the normal of the plane
            normal = self.axis / np.linalg.norm(self.axis)
            if not np.allclose(normal, [0.0, 0.0, 1.0]):
                raise ValueError(
                    f"The planar joint {self.name} must have the z axis as plane normal, got {self.axis}"
                )
            return JointPlanar(name=self.name)
        raise ValueError(f"Cannot build a {self.joint_type.value} joint from urdf")
