# Copyright (C) Istituto Italiano di Tecnologia (IIT). All rights reserved.

from .abc_factories import JointDescription, Link, ModelFactory, Pose
from .tree import Node, Tree
from .model import Model
from .data import Data
from .std_factories import StdJoint, StdLink, URDFModelFactory
