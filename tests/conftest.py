import dataclasses
import logging

import numpy as np
import pytest

from centroidal.core import (
    SE3,
    Inertia,
    JointComposite,
    JointFixed,
    JointFreeFlyer,
    JointPlanar,
    JointPrismatic,
    JointRevolute,
    JointSpherical,
)
from centroidal.core.configuration import random_configuration
from centroidal.core.spatial_math import R_from_RPY
from centroidal.model import Data, Model

logging.basicConfig(level=logging.DEBUG)


@dataclasses.dataclass
class State:
    q: np.ndarray
    v: np.ndarray
    a: np.ndarray


@dataclasses.dataclass
class ArmParams:
    m1: float = 1.5
    m2: float = 0.8
    l1: float = 0.7
    l2: float = 0.4
    Izz1: float = 0.06
    Izz2: float = 0.02


def build_free_body(inertia: Inertia) -> Model:
    model = Model("free_body")
    model.add_joint(0, JointFreeFlyer(), inertia=inertia, name="root_joint")
    return model


def build_two_link_arm(params: ArmParams) -> Model:
    model = Model("two_link_arm")
    shoulder = model.add_joint(
        0,
        JointRevolute([0.0, 0.0, 1.0]),
        inertia=Inertia(
            params.m1,
            [params.l1 / 2, 0.0, 0.0],
            np.diag([0.001, params.Izz1, params.Izz1]),
        ),
        name="shoulder",
    )
    model.add_joint(
        shoulder,
        JointRevolute([0.0, 0.0, 1.0]),
        placement=SE3(np.eye(3), [params.l1, 0.0, 0.0]),
        inertia=Inertia(
            params.m2,
            [params.l2 / 2, 0.0, 0.0],
            np.diag([0.001, params.Izz2, params.Izz2]),
        ),
        name="elbow",
    )
    return model


def build_mixed_tree(rng: np.random.Generator, root_placement: SE3 = None) -> Model:
    """a floating tree using every joint kind, nested composite joints included"""
    model = Model("mixed_tree")
    root_placement = root_placement if root_placement is not None else SE3.identity()
    base = model.add_joint(
        0,
        JointFreeFlyer(),
        placement=root_placement,
        inertia=Inertia.random(rng),
        name="base",
    )
    axis = rng.normal(size=3)
    torso = model.add_joint(
        base,
        JointRevolute(axis / np.linalg.norm(axis)),
        placement=SE3.random(rng),
        inertia=Inertia.random(rng),
        name="torso",
    )
    slider = model.add_joint(
        torso,
        JointPrismatic([0.0, 1.0, 0.0]),
        placement=SE3.random(rng),
        inertia=Inertia.random(rng),
        name="slider",
    )
    ball = model.add_joint(
        base,
        JointSpherical(),
        placement=SE3.random(rng),
        inertia=Inertia.random(rng),
        name="ball",
    )
    model.add_joint(
        ball,
        JointPlanar(),
        placement=SE3.random(rng),
        inertia=Inertia.random(rng),
        name="planar",
    )
    chain = model.add_joint(
        base,
        JointComposite(
            [
                JointRevolute([1.0, 0.0, 0.0]),
                JointPrismatic([0.0, 0.0, 1.0]),
                JointSpherical(),
            ],
            [SE3.random(rng), SE3.random(rng), SE3.random(rng)],
        ),
        placement=SE3.random(rng),
        inertia=Inertia.random(rng),
        name="chain",
    )
    model.add_joint(
        chain,
        JointFixed(),
        placement=SE3.random(rng),
        inertia=Inertia.random(rng),
        name="gripper",
    )
    model.add_joint(
        slider,
        JointComposite(
            [
                JointRevolute([0.0, 0.0, 1.0]),
                JointComposite(
                    [JointRevolute([1.0, 0.0, 0.0]), JointRevolute([0.0, 1.0, 0.0])],
                    [SE3.random(rng), SE3.random(rng)],
                ),
            ],
            [SE3.random(rng), SE3.random(rng)],
        ),
        placement=SE3.random(rng),
        inertia=Inertia.random(rng),
        name="wrist",
    )
    return model


def random_state(model: Model, rng: np.random.Generator) -> State:
    return State(
        q=random_configuration(model, rng),
        v=rng.uniform(-1.0, 1.0, model.nv),
        a=rng.uniform(-1.0, 1.0, model.nv),
    )


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(42)


@pytest.fixture
def arm_params() -> ArmParams:
    return ArmParams()


@pytest.fixture
def two_link_arm(arm_params) -> Model:
    return build_two_link_arm(arm_params)


@pytest.fixture
def mixed_tree(rng) -> Model:
    return build_mixed_tree(rng)


@pytest.fixture
def free_body() -> Model:
    R = R_from_RPY([0.1, 0.2, 0.3])
    return build_free_body(
        Inertia(2.5, [0.1, -0.2, 0.05], R @ np.diag([0.1, 0.2, 0.3]) @ R.T)
    )


@pytest.fixture(params=["free_body", "two_link_arm", "mixed_tree"])
def model_setup(request, rng):
    """every canonical model, with its data and a random state"""
    model = request.getfixturevalue(request.param)
    yield model, Data(model), random_state(model, rng)
