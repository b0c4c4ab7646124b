# Copyright (C) Istituto Italiano di Tecnologia (IIT). All rights reserved.

import copy
import logging
from typing import List, Optional

from centroidal.core.constants import UNIVERSE_NAME, JointType
from centroidal.core.joint import Joint, JointFixed, JointFreeFlyer
from centroidal.core.spatial_math import SE3, Inertia
from centroidal.model.tree import Tree


class Model:
    """
    Model class. It describes the kinematic tree of the robot: joint 0 is the universe,
    every other joint i has a parent parents[i] < i, a constant placement in the parent
    frame and the spatial inertia of the body it carries, expressed in the joint frame.
    """

    def __init__(self, name: str = "model") -> None:
        self.name = name
        universe = JointFixed(name=UNIVERSE_NAME)
        universe.set_indexes(0, 0, 0)
        self.joints: List[Joint] = [universe]
        self.parents: List[int] = [0]
        self.joint_placements: List[SE3] = [SE3.identity()]
        self.inertias: List[Inertia] = [Inertia.zero()]
        self.names: List[str] = [UNIVERSE_NAME]
        self.nq = 0
        self.nv = 0

    @property
    def njoints(self) -> int:
        """number of joints, universe included"""
        return len(self.joints)

    def add_joint(
        self,
        parent_id: int,
        joint: Joint,
        placement: Optional[SE3] = None,
        inertia: Optional[Inertia] = None,
        name: Optional[str] = None,
    ) -> int:
        """appends a joint to the tree

        Args:
            parent_id (int): the id of the parent joint
            joint (Joint): the joint model, the model stores a copy of it
            placement (SE3, optional): placement of the joint in the parent frame. Defaults to identity.
            inertia (Inertia, optional): inertia of the body carried by the joint. Defaults to zero.
            name (str, optional): the joint name. Defaults to the name of the joint model.

        Returns:
            int: the id of the new joint
        """
        joint_id = self.njoints
        if not 0 <= parent_id < joint_id:
            raise ValueError(
                f"Invalid parent id {parent_id}: it must refer to one of the {joint_id} joints already in the model"
            )
        joint = copy.deepcopy(joint)
        name = name if name is not None else joint.name
        if name is None:
            name = f"joint_{joint_id}"
        if name in self.names:
            raise ValueError(f"A joint named {name} is already in the model")
        joint.name = name
        joint.set_indexes(joint_id, self.nq, self.nv)

        self.joints.append(joint)
        self.parents.append(parent_id)
        self.joint_placements.append(
            placement if placement is not None else SE3.identity()
        )
        self.inertias.append(inertia if inertia is not None else Inertia.zero())
        self.names.append(name)
        self.nq += joint.nq
        self.nv += joint.nv
        logging.debug(
            f"Added {joint.type.value} joint {name} (id {joint_id}, parent {self.names[parent_id]}, nq {joint.nq}, nv {joint.nv})"
        )
        return joint_id

    def append_body(
        self, joint_id: int, inertia: Inertia, placement: Optional[SE3] = None
    ) -> None:
        """rigidly attaches a body to an existing joint

        Args:
            joint_id (int): the joint carrying the body
            inertia (Inertia): the inertia of the body, expressed in the body frame
            placement (SE3, optional): placement of the body frame in the joint frame. Defaults to identity.
        """
        if not 0 <= joint_id < self.njoints:
            raise ValueError(f"Invalid joint id {joint_id}")
        placement = placement if placement is not None else SE3.identity()
        self.inertias[joint_id] = self.inertias[joint_id] + placement.act(inertia)
        logging.debug(f"Appended a body of mass {inertia.mass} to {self.names[joint_id]}")

    def get_joint_id(self, name: str) -> int:
        if name not in self.names:
            raise ValueError(f"{name} is not in the model")
        return self.names.index(name)

    def get_total_mass(self) -> float:
        """total mass of the robot

        Returns:
            float: the total mass of the robot
        """
        return sum(inertia.mass for inertia in self.inertias[1:])

    def subtree(self, joint_id: int) -> List[int]:
        """
        Args:
            joint_id (int): the root of the subtree

        Returns:
            List[int]: the ids of the joints in the subtree, joint_id included
        """
        subtree = [joint_id]
        for i in range(joint_id + 1, self.njoints):
            if self.parents[i] in subtree:
                subtree.append(i)
        return subtree

    def signature(self) -> tuple:
        """the sizes a Data must be allocated with"""
        return (
            self.njoints,
            self.nq,
            self.nv,
            tuple((joint.idx_q, joint.nq, joint.idx_v, joint.nv) for joint in self.joints),
        )

    def check(self, data) -> bool:
        """
        Args:
            data (Data): the data to check

        Returns:
            bool: True if data has been allocated for this model
        """
        return data.signature == self.signature()

    @staticmethod
    def build(factory, floating_base: bool = True) -> "Model":
        """generates the model starting from a links-joints factory

        Args:
            factory (ModelFactory): the factory that generates the links and the joints, starting from a description (eg. urdf)
            floating_base (bool): if True the root link is attached to the universe with a free-flyer joint

        Returns:
            Model: the model describing the robot
        """
        tree = Tree.build_tree(links=factory.get_links(), joints=factory.get_joints())
        logging.debug(f"Building the model {factory.name} from the root link {tree.root}")
        model = Model(factory.name)

        root = tree.get_node_from_name(tree.root)
        root_joint = JointFreeFlyer() if floating_base else JointFixed()
        root_id = model.add_joint(
            0, root_joint, inertia=root.link.inertia, name="root_joint"
        )
        body_of = {root.name: (root_id, SE3.identity())}

        for node in list(tree)[1:]:
            parent_id, parent_placement = body_of[node.parent.name]
            arc = node.parent_arc
            placement = parent_placement * arc.placement
            if arc.joint_type == JointType.FIXED:
                # fixed joints are merged: the link becomes part of the parent body
                model.append_body(parent_id, node.link.inertia, placement)
                body_of[node.name] = (parent_id, placement)
                continue
            joint_id = model.add_joint(
                parent_id,
                arc.build(),
                placement=placement,
                inertia=node.link.inertia,
                name=arc.name,
            )
            body_of[node.name] = (joint_id, SE3.identity())
        return model

    def print_table(self):
        """print the table that describes the connectivity between the joints.
        You need rich to use it
        """
        from rich.console import Console
        from rich.table import Table

        console = Console()

        table = Table(show_header=True, header_style="bold red")
        table.add_column("Id")
        table.add_column("Joint name")
        table.add_column("Parent joint")
        table.add_column("Type")
        table.add_column("idx_q")
        table.add_column("idx_v")
        table.add_column("Mass")

        for i in range(1, self.njoints):
            joint = self.joints[i]
            table.add_row(
                str(i),
                self.names[i],
                self.names[self.parents[i]],
                joint.type.value,
                str(joint.idx_q),
                str(joint.idx_v),
                f"{self.inertias[i].mass:.4f}",
            )

        console.print(table)

    def __repr__(self) -> str:
        return f"Model(name={self.name!r}, njoints={self.njoints}, nq={self.nq}, nv={self.nv})"
