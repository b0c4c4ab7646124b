import numpy as np
import pytest

from centroidal.core.spatial_math import (
    SE3,
    Force,
    Inertia,
    Motion,
    R_from_RPY,
    exp3,
    exp6,
    log3,
    skew,
    unskew,
)


def test_skew(rng):
    x, y = rng.normal(size=3), rng.normal(size=3)
    assert skew(x) @ y - np.cross(x, y) == pytest.approx(0.0, abs=1e-12)
    assert unskew(skew(x)) - x == pytest.approx(0.0, abs=1e-12)


def test_exp_log(rng):
    w = rng.uniform(-1.0, 1.0, 3)
    R = exp3(w)
    assert R @ R.T - np.eye(3) == pytest.approx(0.0, abs=1e-12)
    assert log3(R) - w == pytest.approx(0.0, abs=1e-12)

    # pure translation and pure rotation
    M = exp6(Motion([1.0, 2.0, 3.0], np.zeros(3)))
    assert M.is_approx(SE3(np.eye(3), [1.0, 2.0, 3.0]))
    M = exp6(Motion(np.zeros(3), w))
    assert M.is_approx(SE3(R, np.zeros(3)))


def test_exp6_is_the_flow_of_the_twist(rng):
    nu = Motion.random(rng)
    dt = 1e-6
    M = exp6(nu)
    # d/dt exp6(nu t) = exp6(nu t) * nu
    dM = (exp6(nu * (1.0 + dt)).homogeneous - exp6(nu * (1.0 - dt)).homogeneous) / (
        2 * dt
    )
    nu_hat = np.zeros((4, 4))
    nu_hat[:3, :3] = skew(nu.angular)
    nu_hat[:3, 3] = nu.linear
    assert dM - M.homogeneous @ nu_hat == pytest.approx(0.0, abs=1e-6)


def test_rpy():
    R = R_from_RPY([0.3, -0.2, 0.5])
    Rx = exp3([0.3, 0.0, 0.0])
    Ry = exp3([0.0, -0.2, 0.0])
    Rz = exp3([0.0, 0.0, 0.5])
    assert R - Rz @ Ry @ Rx == pytest.approx(0.0, abs=1e-12)


def test_se3_group(rng):
    A, B, C = SE3.random(rng), SE3.random(rng), SE3.random(rng)
    assert ((A * B) * C).is_approx(A * (B * C))
    assert (A * A.inverse()).is_approx(SE3.identity())
    assert (A * B).homogeneous - A.homogeneous @ B.homogeneous == pytest.approx(
        0.0, abs=1e-12
    )
    assert SE3.from_homogeneous(A.homogeneous).is_approx(A)
    p = rng.normal(size=3)
    assert A.act_inv(A.act(p)) - p == pytest.approx(0.0, abs=1e-12)


def test_se3_action_matrices(rng):
    M = SE3.random(rng)
    m = Motion.random(rng)
    f = Force.from_vector(rng.normal(size=6))
    assert M.act(m).vector - M.action_matrix() @ m.vector == pytest.approx(
        0.0, abs=1e-12
    )
    assert M.act(f).vector - M.dual_action_matrix() @ f.vector == pytest.approx(
        0.0, abs=1e-12
    )
    assert M.act_inv(M.act(m)).is_approx(m)
    assert M.act_inv(M.act(f)).is_approx(f)
    # the power is invariant to a change of frame
    assert M.act(f).dot(M.act(m)) - f.dot(m) == pytest.approx(0.0, abs=1e-12)

    S = rng.normal(size=(6, 4))
    assert M.act_motion_set(S) - M.action_matrix() @ S == pytest.approx(0.0, abs=1e-12)
    assert M.act_force_set(S) - M.dual_action_matrix() @ S == pytest.approx(
        0.0, abs=1e-12
    )


def test_motion_cross(rng):
    m1, m2, m3 = Motion.random(rng), Motion.random(rng), Motion.random(rng)
    f = Force.from_vector(rng.normal(size=6))
    assert (m1 ^ m2).is_approx(-(m2 ^ m1))
    jacobi = (m1 ^ (m2 ^ m3)) + (m2 ^ (m3 ^ m1)) + (m3 ^ (m1 ^ m2))
    assert jacobi.is_approx(Motion.zero())
    assert (m1 ^ m2).vector - m1.action_matrix() @ m2.vector == pytest.approx(
        0.0, abs=1e-12
    )
    # the dual cross product is the opposite of the transposed motion one
    assert m1.cross(f).dot(m2) + f.dot(m1 ^ m2) == pytest.approx(0.0, abs=1e-12)
    assert m1.cross(f).vector - m1.action_force_matrix() @ f.vector == pytest.approx(
        0.0, abs=1e-12
    )
    assert m1.cross(m2).is_approx(m1 ^ m2)


def test_inertia_matrix(rng):
    Y = Inertia.random(rng)
    v = Motion.random(rng)
    assert (Y * v).vector - Y.matrix() @ v.vector == pytest.approx(0.0, abs=1e-12)
    assert Inertia.from_matrix6(Y.matrix()).is_approx(Y)
    assert Y.matrix() - Y.matrix().T == pytest.approx(0.0, abs=1e-12)
    S = rng.normal(size=(6, 3))
    assert Y.apply_set(S) - Y.matrix() @ S == pytest.approx(0.0, abs=1e-12)


def test_inertia_transport(rng):
    Y = Inertia.random(rng)
    M = SE3.random(rng)
    v = Motion.random(rng)
    # the momentum of the body does not depend on the frame it is computed in
    assert (M.act(Y) * M.act(v)).is_approx(M.act(Y * v))
    assert M.act_inv(M.act(Y)).is_approx(Y)
    assert M.act(Y).matrix() - M.dual_action_matrix() @ Y.matrix() @ M.inverse().action_matrix() == pytest.approx(
        0.0, abs=1e-12
    )


def test_inertia_sum(rng):
    Ya, Yb = Inertia.random(rng), Inertia.random(rng)
    Y = Ya + Yb
    assert Y.mass == pytest.approx(Ya.mass + Yb.mass)
    assert Y.matrix() - (Ya.matrix() + Yb.matrix()) == pytest.approx(0.0, abs=1e-12)
    assert (Ya + Inertia.zero()).is_approx(Ya)
    assert (Inertia.zero() + Inertia.zero()).is_approx(Inertia.zero())


def test_inertia_variation(rng):
    Y = Inertia.random(rng)
    M = SE3.random(rng)
    v = Motion.random(rng)
    dt = 1e-6

    # a body moving with the body velocity v has the world velocity M.act(v)
    def world_inertia(t):
        return (M * exp6(v * t)).act(Y).matrix()

    dY = (world_inertia(dt) - world_inertia(-dt)) / (2 * dt)
    assert dY - M.act(Y).variation(M.act(v)) == pytest.approx(0.0, abs=1e-6)


def test_inertia_variation_product_rule(rng):
    Y = Inertia.random(rng)
    v = Motion.random(rng)
    # d(Y v)/dt with v expressed in a frame moving at v, and no acceleration
    assert Y.variation(v) @ v.vector - v.cross(Y * v).vector == pytest.approx(
        0.0, abs=1e-12
    )
