# Copyright (C) Istituto Italiano di Tecnologia (IIT). All rights reserved.

import os
import pathlib
import xml.etree.ElementTree as ET
from typing import List, Union

import urdf_parser_py.urdf

from centroidal.model.abc_factories import ModelFactory
from centroidal.model.std_factories.std_joint import StdJoint
from centroidal.model.std_factories.std_link import StdLink


def urdf_remove_sensors_tags(xml_string: str) -> bytes:
    root = ET.fromstring(xml_string)

    # sensor tags are children of the robot node
    for sensors_tag in root.findall("sensor"):
        root.remove(sensors_tag)

    return ET.tostring(root)


def get_xml_string(path: Union[str, pathlib.Path]) -> str:
    """
    Args:
        path (Union[str, pathlib.Path]): the path of an urdf file or an urdf string

    Returns:
        str: the urdf content
    """
    isPath = isinstance(path, pathlib.Path)
    isUrdf = False

    if not isPath:
        if len(path) <= os.pathconf("/", "PC_PATH_MAX") and os.path.exists(path):
            path = pathlib.Path(path)
            isPath = True
        else:
            try:
                root = ET.fromstring(path)
            except ET.ParseError as e:
                raise ValueError(
                    f"Invalid urdf string: {path}. It is neither a path nor a urdf string"
                ) from e
            isUrdf = root.tag == "robot"
            xml_string = path

    if isPath:
        if not path.is_file():
            raise FileExistsError(path)

        with path.open() as xml_file:
            xml_string = xml_file.read()

    if not isPath and not isUrdf:
        raise ValueError(
            f"Invalid urdf string: {path}. It is neither a path nor a urdf string"
        )

    return xml_string


class URDFModelFactory(ModelFactory):
    """This factory generates robot elements from urdf_parser_py

    Args:
        path (Union[str, pathlib.Path]): the path of the urdf or the urdf string
    """

    def __init__(self, path: Union[str, pathlib.Path]):
        xml_string = get_xml_string(path)

        # urdf_parser_py warns on every sensor tag it finds, they are not used here
        xml_string_without_sensors_tags = urdf_remove_sensors_tags(xml_string)
        self.urdf_desc = urdf_parser_py.urdf.URDF.from_xml_string(
            xml_string_without_sensors_tags
        )
        self.name = self.urdf_desc.name

    def get_joints(self) -> List[StdJoint]:
        """
        Returns:
            List[StdJoint]: build the list of the joints
        """
        return [StdJoint(j) for j in self.urdf_desc.joints]

    def get_links(self) -> List[StdLink]:
        """
        Returns:
            List[StdLink]: build the list of the links
        """
        return [StdLink(l) for l in self.urdf_desc.links]
