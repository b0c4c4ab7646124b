import numpy as np
import pytest

from centroidal.core import Inertia, ccrba, compute_centroidal_momentum
from centroidal.core.com import center_of_mass


def test_linear_consistency(model_setup):
    model, data, state = model_setup
    hg = compute_centroidal_momentum(model, data, state.q, state.v).vector.copy()
    Ag = ccrba(model, data, state.q, state.v)
    assert Ag.shape == (6, model.nv)
    assert Ag @ state.v - hg == pytest.approx(0.0, abs=1e-10)
    assert data.hg.vector - hg == pytest.approx(0.0, abs=1e-10)


def test_columns_are_momentum_of_unit_velocities(model_setup):
    model, data, state = model_setup
    Ag = ccrba(model, data, state.q, state.v).copy()
    for k in range(model.nv):
        e_k = np.zeros(model.nv)
        e_k[k] = 1.0
        hg = compute_centroidal_momentum(model, data, state.q, e_k)
        assert Ag[:, k] - hg.vector == pytest.approx(0.0, abs=1e-10)


def test_linear_rows(model_setup):
    model, data, state = model_setup
    Ag = ccrba(model, data, state.q, state.v).copy()
    mass = data.mass[0]
    center_of_mass(model, data, state.q, state.v)
    assert Ag[:3, :] @ state.v - mass * data.vcom[0] == pytest.approx(0.0, abs=1e-10)


def test_centroidal_inertia(model_setup):
    model, data, state = model_setup
    ccrba(model, data, state.q, state.v)
    com = data.com[0].copy()
    Ig = data.Ig
    # sum of the world inertias of all the bodies, seen from the center of mass
    expected = Inertia.zero()
    center_of_mass(model, data, state.q)
    for i in range(1, model.njoints):
        expected = expected + data.oMi[i].act(model.inertias[i])
    assert Ig.mass == pytest.approx(expected.mass)
    assert Ig.lever == pytest.approx(0.0, abs=1e-12)
    assert expected.lever - com == pytest.approx(0.0, abs=1e-10)
    assert Ig.inertia - expected.inertia == pytest.approx(0.0, abs=1e-10)


def test_no_stale_values(model_setup, rng):
    model, data, state = model_setup
    ccrba(model, data, state.q, state.v)
    data.Ag[:] = np.nan
    Ag = ccrba(model, data, state.q, state.v)
    assert np.all(np.isfinite(Ag))
