import numpy as np
import pytest
from conftest import random_state
from test_urdf import URDF

from centroidal import KinDynComputations
from centroidal.core import ccrba
from centroidal.model import Data


@pytest.fixture
def kin_dyn(mixed_tree) -> KinDynComputations:
    return KinDynComputations(mixed_tree)


def test_centroidal_momentum(kin_dyn, rng):
    state = random_state(kin_dyn.model, rng)
    hg = kin_dyn.centroidal_momentum(state.q, state.v)
    Ag = kin_dyn.centroidal_momentum_matrix(state.q)
    assert hg.shape == (6,)
    assert Ag.shape == (6, kin_dyn.nv)
    assert Ag @ state.v - hg == pytest.approx(0.0, abs=1e-10)


def test_centroidal_momentum_rate(kin_dyn, rng):
    state = random_state(kin_dyn.model, rng)
    dhg = kin_dyn.centroidal_momentum_rate(state.q, state.v, state.a)
    Ag = kin_dyn.centroidal_momentum_matrix(state.q)
    dAg = kin_dyn.centroidal_momentum_matrix_dot(state.q, state.v)
    assert Ag @ state.a + dAg @ state.v - dhg == pytest.approx(0.0, abs=1e-10)


def test_results_are_not_views(kin_dyn, rng):
    state = random_state(kin_dyn.model, rng)
    Ag = kin_dyn.centroidal_momentum_matrix(state.q)
    com = kin_dyn.CoM_position(state.q)
    kin_dyn.centroidal_momentum_matrix(kin_dyn.neutral())
    kin_dyn.CoM_position(kin_dyn.neutral())
    data = Data(kin_dyn.model)
    assert Ag - ccrba(kin_dyn.model, data, state.q, state.v) == pytest.approx(0.0, abs=1e-12)
    assert com - data.com[0] == pytest.approx(0.0, abs=1e-12)


def test_com(kin_dyn, rng):
    state = random_state(kin_dyn.model, rng)
    mass = kin_dyn.get_total_mass()
    assert mass == pytest.approx(sum(Y.mass for Y in kin_dyn.model.inertias))
    hg = kin_dyn.centroidal_momentum(state.q, state.v)
    assert kin_dyn.CoM_velocity(state.q, state.v) - hg[:3] / mass == pytest.approx(0.0, abs=1e-10)
    assert kin_dyn.CoM_position(state.q).shape == (3,)


def test_from_urdf():
    kin_dyn = KinDynComputations.from_urdf(URDF)
    assert (kin_dyn.nq, kin_dyn.nv) == (10, 9)
    q = kin_dyn.neutral()
    assert q == pytest.approx([0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 1.0, 0.0, 0.0, 0.0])
    v = np.zeros(kin_dyn.nv)
    v[:3] = [1.0, 2.0, 3.0]
    hg = kin_dyn.centroidal_momentum(q, v)
    assert hg[:3] - kin_dyn.get_total_mass() * v[:3] == pytest.approx(0.0, abs=1e-12)
    assert hg[3:] == pytest.approx(0.0, abs=1e-12)

    fixed = KinDynComputations.from_urdf(URDF, floating_base=False)
    assert fixed.nv == 3
    with pytest.raises(ValueError):
        fixed.centroidal_momentum(q, v)
