# Copyright (C) Istituto Italiano di Tecnologia (IIT). All rights reserved.

from pathlib import Path
from typing import Union

import numpy as np

from centroidal.core.centroidal import (
    ccrba,
    compute_centroidal_momentum,
    compute_centroidal_momentum_time_variation,
    dccrba,
)
from centroidal.core.com import center_of_mass
from centroidal.core.configuration import neutral
from centroidal.model import Data, Model, URDFModelFactory


class KinDynComputations:
    """This is a small class that retrieves the centroidal quantities of a robot using NumPy.

    It owns a Model and the Data allocated for it, so an instance must not be shared
    between concurrent callers.
    """

    def __init__(self, model: Model) -> None:
        """
        Args:
            model (Model): the model of the robot
        """
        self.model = model
        self.data = Data(model)
        self.nq = model.nq
        self.nv = model.nv

    @staticmethod
    def from_urdf(
        urdf_string: Union[str, Path], floating_base: bool = True
    ) -> "KinDynComputations":
        """Creates a KinDynComputations object from a URDF string

        Args:
            urdf_string (Union[str, Path]): The URDF path or string
            floating_base (bool, optional): if True the root link moves freely. Defaults to True.

        Returns:
            KinDynComputations: The KinDynComputations object
        """
        factory = URDFModelFactory(path=urdf_string)
        model = Model.build(factory=factory, floating_base=floating_base)
        return KinDynComputations(model)

    def centroidal_momentum(self, q: np.ndarray, v: np.ndarray) -> np.ndarray:
        """Returns the centroidal momentum

        Args:
            q (np.ndarray): The configuration vector
            v (np.ndarray): The velocity vector

        Returns:
            hg (np.ndarray): the linear and angular momentum about the center of mass
        """
        return compute_centroidal_momentum(self.model, self.data, q, v).vector

    def centroidal_momentum_rate(
        self, q: np.ndarray, v: np.ndarray, a: np.ndarray
    ) -> np.ndarray:
        """Returns the time derivative of the centroidal momentum

        Args:
            q (np.ndarray): The configuration vector
            v (np.ndarray): The velocity vector
            a (np.ndarray): The acceleration vector

        Returns:
            dhg (np.ndarray): the rate of change of the centroidal momentum
        """
        return compute_centroidal_momentum_time_variation(
            self.model, self.data, q, v, a
        ).vector

    def centroidal_momentum_matrix(self, q: np.ndarray) -> np.ndarray:
        """Returns the Centroidal Momentum Matrix computed with the CCRBA

        Args:
            q (np.ndarray): The configuration vector

        Returns:
            Ag (np.ndarray): Centroidal Momentum matrix
        """
        return ccrba(self.model, self.data, q, np.zeros(self.nv)).copy()

    def centroidal_momentum_matrix_dot(
        self, q: np.ndarray, v: np.ndarray
    ) -> np.ndarray:
        """Returns the time derivative of the Centroidal Momentum Matrix

        Args:
            q (np.ndarray): The configuration vector
            v (np.ndarray): The velocity vector

        Returns:
            dAg (np.ndarray): time derivative of the Centroidal Momentum matrix
        """
        return dccrba(self.model, self.data, q, v).copy()

    def CoM_position(self, q: np.ndarray) -> np.ndarray:
        """Returns the CoM position

        Args:
            q (np.ndarray): The configuration vector

        Returns:
            com (np.ndarray): The CoM position
        """
        return center_of_mass(self.model, self.data, q).copy()

    def CoM_velocity(self, q: np.ndarray, v: np.ndarray) -> np.ndarray:
        """Returns the CoM velocity

        Args:
            q (np.ndarray): The configuration vector
            v (np.ndarray): The velocity vector

        Returns:
            vcom (np.ndarray): The CoM velocity
        """
        center_of_mass(self.model, self.data, q, v)
        return self.data.vcom[0].copy()

    def get_total_mass(self) -> float:
        """Returns the total mass of the robot

        Returns:
            mass: The total mass
        """
        return self.model.get_total_mass()

    def neutral(self) -> np.ndarray:
        """Returns the neutral configuration of the robot"""
        return neutral(self.model)
