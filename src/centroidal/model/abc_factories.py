# Copyright (C) Istituto Italiano di Tecnologia (IIT). All rights reserved.

import abc
import dataclasses
from typing import List

import numpy.typing as npt

from centroidal.core.constants import JointType
from centroidal.core.joint import Joint
from centroidal.core.spatial_math import SE3, Inertia


@dataclasses.dataclass(frozen=True)
class Pose:
    """Pose class"""

    xyz: npt.ArrayLike
    rpy: npt.ArrayLike

    @staticmethod
    def zero() -> "Pose":
        return Pose([0.0, 0.0, 0.0], [0.0, 0.0, 0.0])

    def placement(self) -> SE3:
        return SE3.from_xyz_rpy(self.xyz, self.rpy)


@dataclasses.dataclass
class Link(abc.ABC):
    """Base Link class. You need to fill at least these fields"""

    name: str

    @property
    @abc.abstractmethod
    def inertia(self) -> Inertia:
        """
        Returns:
            Inertia: the inertia of the link expressed in the link frame
        """
        pass


@dataclasses.dataclass
class JointDescription(abc.ABC):
    """Base class of the joints coming from a robot description"""

    name: str
    parent: str
    child: str
    joint_type: JointType

    @property
    @abc.abstractmethod
    def placement(self) -> SE3:
        """
        Returns:
            SE3: the placement of the joint frame in the parent link frame
        """
        pass

    @abc.abstractmethod
    def build(self) -> Joint:
        """
        Returns:
            Joint: the joint model moving the child link
        """
        pass


class ModelFactory(abc.ABC):
    """The abstract class of the model factory.

    The model factory is responsible for creating the model.
    You need to implement all the methods in your concrete implementation
    """

    name: str

    @abc.abstractmethod
    def get_links(self) -> List[Link]:
        """
        Returns:
            List[Link]: the list of the links
        """
        pass

    @abc.abstractmethod
    def get_joints(self) -> List[JointDescription]:
        """
        Returns:
            List[JointDescription]: the list of the joints
        """
        pass
