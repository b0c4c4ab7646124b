# Copyright (C) Istituto Italiano di Tecnologia (IIT). All rights reserved.

from .std_joint import StdJoint
from .std_link import StdLink
from .std_model import URDFModelFactory, get_xml_string, urdf_remove_sensors_tags
