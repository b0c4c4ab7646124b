# Copyright (C) Istituto Italiano di Tecnologia (IIT). All rights reserved.

import dataclasses
from typing import Dict, Iterable, Iterator, List, Union

from centroidal.model.abc_factories import JointDescription, Link


@dataclasses.dataclass
class Node:
    """The node class"""

    name: str
    link: Link
    arcs: List[JointDescription]
    children: List["Node"]
    parent: Union[Link, None] = None
    parent_arc: Union[JointDescription, None] = None

    def __hash__(self) -> int:
        return hash(self.name)


@dataclasses.dataclass
class Tree(Iterable):
    """The directed tree of a robot description, visited parents first"""

    graph: Dict[str, Node]
    root: str

    def __post_init__(self):
        self.ordered_nodes_list = self.get_ordered_nodes_list(self.root)

    @staticmethod
    def build_tree(links: List[Link], joints: List[JointDescription]) -> "Tree":
        """builds the tree from the connectivity of the elements

        Args:
            links (List[Link])
            joints (List[JointDescription])

        Returns:
            Tree: the directed tree
        """
        nodes: Dict[str, Node] = {
            l.name: Node(name=l.name, link=l, arcs=[], children=[]) for l in links
        }

        for joint in joints:
            if joint.parent not in nodes or joint.child not in nodes:
                raise ValueError(
                    f"The joint {joint.name} connects the unknown links {joint.parent} and {joint.child}"
                )
            if nodes[joint.child].parent is not None:
                raise ValueError(f"The link {joint.child} has more than one parent")
            nodes[joint.parent].children.append(nodes[joint.child])
            nodes[joint.parent].arcs.append(joint)
            nodes[joint.child].parent = nodes[joint.parent].link
            nodes[joint.child].parent_arc = joint

        root_link = [l for l in nodes if nodes[l].parent is None]
        if len(root_link) != 1:
            raise ValueError(
                f"The model must have exactly one root link, found {root_link}"
            )
        return Tree(nodes, root_link[0])

    def get_ordered_nodes_list(self, start: str) -> List[str]:
        """get the list of the nodes ordered parents before children

        Args:
            start (str): the start node

        Returns:
            List[str]: the ordered list
        """
        ordered_list = []
        stack = [self.graph[start]]
        while stack:
            node = stack.pop()
            ordered_list.append(node.name)
            stack.extend(reversed(node.children))
        return ordered_list

    def get_node_from_name(self, name: str) -> Node:
        return self.graph[name]

    def __iter__(self) -> Iterator[Node]:
        yield from [self.graph[name] for name in self.ordered_nodes_list]

    def __len__(self) -> int:
        return len(self.ordered_nodes_list)
