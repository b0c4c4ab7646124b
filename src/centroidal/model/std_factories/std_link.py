# Copyright (C) Istituto Italiano di Tecnologia (IIT). All rights reserved.

import numpy as np
import urdf_parser_py.urdf

from centroidal.core.spatial_math import Inertia, R_from_RPY
from centroidal.model.abc_factories import Link, Pose


class StdLink(Link):
    """Standard Link class"""

    def __init__(self, link: urdf_parser_py.urdf.Link):
        self.name = link.name
        self.origin = self._set_origin(link)
        self._inertia = self._set_inertia(link)

    def _set_origin(self, link: urdf_parser_py.urdf.Link) -> Pose:
        inertial = link.inertial
        if inertial is None or inertial.origin is None:
            return Pose.zero()
        return Pose(
            xyz=inertial.origin.xyz or [0.0, 0.0, 0.0],
            rpy=inertial.origin.rpy or [0.0, 0.0, 0.0],
        )

    def _set_inertia(self, link: urdf_parser_py.urdf.Link) -> Inertia:
        """
        Args:
            link (urdf_parser_py.urdf.Link): the urdf link

        Returns:
            Inertia: the link inertia, zero if the link has no inertial
        """
        inertial = link.inertial
        if inertial is None:
            return Inertia.zero()

        I = inertial.inertia
        inertia_matrix = (
            np.zeros((3, 3))
            if I is None
            else np.array(
                [
                    [I.ixx, I.ixy, I.ixz],
                    [I.ixy, I.iyy, I.iyz],
                    [I.ixz, I.iyz, I.izz],
                ]
            )
        )
        # the inertial frame can be rotated w.r.t. the link frame
        R = R_from_RPY(self.origin.rpy)
        return Inertia(
            mass=inertial.mass or 0.0,
            lever=self.origin.xyz,
            inertia=R @ inertia_matrix @ R.T,
        )

    @property
    def inertia(self) -> Inertia:
        return self._inertia
