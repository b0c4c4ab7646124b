# Copyright (C) Istituto Italiano di Tecnologia (IIT). All rights reserved.

"""Spatial algebra: rigid transforms, spatial motion/force vectors and spatial inertia.

Every spatial 6D vector is stored as ``[linear; angular]``.
"""

from typing import Union

import numpy as np
import numpy.typing as npt
from scipy.spatial.transform import Rotation


def skew(x: npt.ArrayLike) -> np.ndarray:
    """
    Args:
        x (npt.ArrayLike): 3D vector

    Returns:
        np.ndarray: the skew symmetric matrix such that skew(x) @ y = x x y
    """
    # Retrieving the skew sym matrix using a cross product
    return -np.cross(np.asarray(x, dtype=float), np.eye(3), axisa=0, axisb=0)


def unskew(S: np.ndarray) -> np.ndarray:
    return np.array([S[2, 1], S[0, 2], S[1, 0]])


def exp3(omega: npt.ArrayLike) -> np.ndarray:
    """
    Args:
        omega (npt.ArrayLike): rotation vector

    Returns:
        np.ndarray: the rotation matrix exp(skew(omega))
    """
    return Rotation.from_rotvec(np.asarray(omega, dtype=float)).as_matrix()


def log3(R: np.ndarray) -> np.ndarray:
    return Rotation.from_matrix(R).as_rotvec()


def exp6(nu: "Motion") -> "SE3":
    """SE(3) exponential map of a body twist

    Args:
        nu (Motion): the twist integrated over a unit time

    Returns:
        SE3: the displacement
    """
    v, w = nu.linear, nu.angular
    theta = np.linalg.norm(w)
    W = skew(w)
    if theta < 1e-8:
        # second order expansion of the left jacobian of SO(3)
        V = np.eye(3) + 0.5 * W + W @ W / 6.0
    else:
        V = (
            np.eye(3)
            + (1.0 - np.cos(theta)) / theta**2 * W
            + (theta - np.sin(theta)) / theta**3 * W @ W
        )
    return SE3(exp3(w), V @ v)


def R_from_RPY(rpy: npt.ArrayLike) -> np.ndarray:
    """
    Args:
        rpy (npt.ArrayLike): rotation as rpy angles

    Returns:
        np.ndarray: Rotation matrix Rz(y) @ Ry(p) @ Rx(r)
    """
    return Rotation.from_euler("xyz", np.asarray(rpy, dtype=float)).as_matrix()


def R_from_axis_angle(axis: npt.ArrayLike, q: float) -> np.ndarray:
    return Rotation.from_rotvec(np.asarray(axis, dtype=float) * q).as_matrix()


def R_from_quaternion(quat: npt.ArrayLike) -> np.ndarray:
    """
    Args:
        quat (npt.ArrayLike): unit quaternion as [x, y, z, w]

    Returns:
        np.ndarray: Rotation matrix
    """
    return Rotation.from_quat(np.asarray(quat, dtype=float)).as_matrix()


def quaternion_from_R(R: np.ndarray) -> np.ndarray:
    return Rotation.from_matrix(R).as_quat()


class Motion:
    """Spatial motion vector (twist or spatial acceleration)"""

    __slots__ = ("linear", "angular")

    def __init__(self, linear: npt.ArrayLike, angular: npt.ArrayLike) -> None:
        self.linear = np.asarray(linear, dtype=float).reshape(3)
        self.angular = np.asarray(angular, dtype=float).reshape(3)

    @staticmethod
    def zero() -> "Motion":
        return Motion(np.zeros(3), np.zeros(3))

    @staticmethod
    def from_vector(x: npt.ArrayLike) -> "Motion":
        x = np.asarray(x, dtype=float).reshape(6)
        return Motion(x[:3], x[3:])

    @staticmethod
    def random(rng: np.random.Generator) -> "Motion":
        return Motion.from_vector(rng.uniform(-1.0, 1.0, 6))

    @property
    def vector(self) -> np.ndarray:
        return np.concatenate([self.linear, self.angular])

    def __add__(self, other: "Motion") -> "Motion":
        return Motion(self.linear + other.linear, self.angular + other.angular)

    def __sub__(self, other: "Motion") -> "Motion":
        return Motion(self.linear - other.linear, self.angular - other.angular)

    def __neg__(self) -> "Motion":
        return Motion(-self.linear, -self.angular)

    def __mul__(self, alpha: float) -> "Motion":
        return Motion(alpha * self.linear, alpha * self.angular)

    __rmul__ = __mul__

    def __xor__(self, other: "Motion") -> "Motion":
        """Lie bracket of the motion algebra, self x other"""
        return Motion(
            np.cross(self.angular, other.linear) + np.cross(self.linear, other.angular),
            np.cross(self.angular, other.angular),
        )

    def cross(self, other: Union["Motion", "Force"]) -> Union["Motion", "Force"]:
        """
        Args:
            other (Union[Motion, Force]): the vector the motion acts on

        Returns:
            Union[Motion, Force]: self x other for a motion, self x* other for a force
        """
        if isinstance(other, Force):
            return Force(
                np.cross(self.angular, other.linear),
                np.cross(self.angular, other.angular)
                + np.cross(self.linear, other.linear),
            )
        return self ^ other

    def action_matrix(self) -> np.ndarray:
        """
        Returns:
            np.ndarray: the 6x6 matrix of the motion cross product (spatial skew)
        """
        X = np.zeros((6, 6))
        X[:3, :3] = skew(self.angular)
        X[:3, 3:] = skew(self.linear)
        X[3:, 3:] = skew(self.angular)
        return X

    def action_force_matrix(self) -> np.ndarray:
        """
        Returns:
            np.ndarray: the 6x6 matrix of the dual cross product, -action_matrix().T
        """
        return -self.action_matrix().T

    def act_set(self, M: np.ndarray) -> np.ndarray:
        """Applies the motion cross product to every column of a 6xk motion matrix"""
        return self.action_matrix() @ M

    def is_approx(self, other: "Motion", tol: float = 1e-9) -> bool:
        return np.allclose(self.vector, other.vector, atol=tol)

    def __repr__(self) -> str:
        return f"Motion(linear={self.linear!r}, angular={self.angular!r})"


class Force:
    """Spatial force vector (wrench or spatial momentum)"""

    __slots__ = ("linear", "angular")

    def __init__(self, linear: npt.ArrayLike, angular: npt.ArrayLike) -> None:
        self.linear = np.asarray(linear, dtype=float).reshape(3)
        self.angular = np.asarray(angular, dtype=float).reshape(3)

    @staticmethod
    def zero() -> "Force":
        return Force(np.zeros(3), np.zeros(3))

    @staticmethod
    def from_vector(x: npt.ArrayLike) -> "Force":
        x = np.asarray(x, dtype=float).reshape(6)
        return Force(x[:3], x[3:])

    @property
    def vector(self) -> np.ndarray:
        return np.concatenate([self.linear, self.angular])

    def __add__(self, other: "Force") -> "Force":
        return Force(self.linear + other.linear, self.angular + other.angular)

    def __sub__(self, other: "Force") -> "Force":
        return Force(self.linear - other.linear, self.angular - other.angular)

    def __neg__(self) -> "Force":
        return Force(-self.linear, -self.angular)

    def __mul__(self, alpha: float) -> "Force":
        return Force(alpha * self.linear, alpha * self.angular)

    __rmul__ = __mul__

    def dot(self, m: Motion) -> float:
        """Power of the force along the motion, invariant to changes of frame"""
        return float(self.linear @ m.linear + self.angular @ m.angular)

    def is_approx(self, other: "Force", tol: float = 1e-9) -> bool:
        return np.allclose(self.vector, other.vector, atol=tol)

    def __repr__(self) -> str:
        return f"Force(linear={self.linear!r}, angular={self.angular!r})"


class Inertia:
    """Spatial inertia of a rigid body

    Args:
        mass (float): the body mass
        lever (npt.ArrayLike): the center of mass position in the body frame
        inertia (npt.ArrayLike): the 3x3 rotational inertia about the center of mass
    """

    __slots__ = ("mass", "lever", "inertia")

    def __init__(
        self, mass: float, lever: npt.ArrayLike, inertia: npt.ArrayLike
    ) -> None:
        self.mass = float(mass)
        self.lever = np.asarray(lever, dtype=float).reshape(3)
        self.inertia = np.asarray(inertia, dtype=float).reshape(3, 3)

    @staticmethod
    def zero() -> "Inertia":
        return Inertia(0.0, np.zeros(3), np.zeros((3, 3)))

    @staticmethod
    def from_matrix6(Y: np.ndarray) -> "Inertia":
        """
        Args:
            Y (np.ndarray): a 6x6 spatial inertia matrix

        Returns:
            Inertia: the corresponding inertia
        """
        mass = Y[0, 0]
        lever = unskew(Y[3:, :3]) / mass if mass > 0 else np.zeros(3)
        Sc = skew(lever)
        return Inertia(mass, lever, Y[3:, 3:] + mass * Sc @ Sc)

    @staticmethod
    def random(rng: np.random.Generator) -> "Inertia":
        A = rng.uniform(-1.0, 1.0, (3, 3))
        return Inertia(
            rng.uniform(0.5, 2.0), rng.uniform(-0.5, 0.5, 3), A @ A.T + 0.1 * np.eye(3)
        )

    def matrix(self) -> np.ndarray:
        """
        Returns:
            np.ndarray: the 6x6 inertia matrix expressed at the origin of the body frame
        """
        Sc = skew(self.lever)
        Y = np.zeros((6, 6))
        Y[:3, :3] = self.mass * np.eye(3)
        Y[:3, 3:] = self.mass * Sc.T
        Y[3:, :3] = self.mass * Sc
        Y[3:, 3:] = self.inertia + self.mass * Sc @ Sc.T
        return Y

    def __mul__(self, v: Motion) -> Force:
        f = self.mass * (v.linear - np.cross(self.lever, v.angular))
        return Force(f, self.inertia @ v.angular + np.cross(self.lever, f))

    def __add__(self, other: "Inertia") -> "Inertia":
        mab = self.mass + other.mass
        if mab <= 0.0:
            return Inertia(0.0, np.zeros(3), self.inertia + other.inertia)
        lever = (self.mass * self.lever + other.mass * other.lever) / mab
        AB = skew(self.lever - other.lever)
        return Inertia(
            mab,
            lever,
            self.inertia + other.inertia - self.mass * other.mass / mab * AB @ AB,
        )

    def apply_set(self, S: np.ndarray) -> np.ndarray:
        """Maps every column of a 6xk motion matrix to the corresponding force"""
        return self.matrix() @ S

    def variation(self, v: Motion) -> np.ndarray:
        """Time derivative of the inertia of a body moving with the spatial velocity v

        Args:
            v (Motion): the velocity of the body, expressed in the frame of the inertia

        Returns:
            np.ndarray: the 6x6 matrix v x* Y - Y v x
        """
        Y = self.matrix()
        return v.action_force_matrix() @ Y - Y @ v.action_matrix()

    def is_approx(self, other: "Inertia", tol: float = 1e-9) -> bool:
        return np.allclose(self.matrix(), other.matrix(), atol=tol)

    def __repr__(self) -> str:
        return f"Inertia(mass={self.mass!r}, lever={self.lever!r}, inertia={self.inertia!r})"


class SE3:
    """Rigid transform x_parent = rotation @ x_child + translation

    Args:
        rotation (npt.ArrayLike): Rotation matrix
        translation (npt.ArrayLike): translation vector
    """

    __slots__ = ("rotation", "translation")

    def __init__(self, rotation: npt.ArrayLike, translation: npt.ArrayLike) -> None:
        self.rotation = np.asarray(rotation, dtype=float).reshape(3, 3)
        self.translation = np.asarray(translation, dtype=float).reshape(3)

    @staticmethod
    def identity() -> "SE3":
        return SE3(np.eye(3), np.zeros(3))

    @staticmethod
    def from_homogeneous(H: npt.ArrayLike) -> "SE3":
        H = np.asarray(H, dtype=float)
        return SE3(H[:3, :3], H[:3, 3])

    @staticmethod
    def from_xyz_rpy(xyz: npt.ArrayLike, rpy: npt.ArrayLike) -> "SE3":
        return SE3(R_from_RPY(rpy), xyz)

    @staticmethod
    def random(rng: np.random.Generator) -> "SE3":
        quat = rng.normal(size=4)
        return SE3(R_from_quaternion(quat / np.linalg.norm(quat)), rng.uniform(-1.0, 1.0, 3))

    @property
    def homogeneous(self) -> np.ndarray:
        H = np.eye(4)
        H[:3, :3] = self.rotation
        H[:3, 3] = self.translation
        return H

    def inverse(self) -> "SE3":
        RT = self.rotation.T
        return SE3(RT, -RT @ self.translation)

    def __mul__(self, other: "SE3") -> "SE3":
        return SE3(
            self.rotation @ other.rotation,
            self.rotation @ other.translation + self.translation,
        )

    def action_matrix(self) -> np.ndarray:
        """
        Returns:
            np.ndarray: the 6x6 spatial transform acting on motion vectors
        """
        X = np.zeros((6, 6))
        X[:3, :3] = self.rotation
        X[3:, 3:] = self.rotation
        X[:3, 3:] = skew(self.translation) @ self.rotation
        return X

    def dual_action_matrix(self) -> np.ndarray:
        """
        Returns:
            np.ndarray: the 6x6 spatial transform acting on force vectors
        """
        X = np.zeros((6, 6))
        X[:3, :3] = self.rotation
        X[3:, 3:] = self.rotation
        X[3:, :3] = skew(self.translation) @ self.rotation
        return X

    def act(self, x):
        """Expresses in the parent frame a quantity given in the child frame

        Args:
            x (Union[Motion, Force, Inertia, np.ndarray]): a spatial quantity or a 3D point

        Returns:
            the transformed quantity, of the same type of x
        """
        R, p = self.rotation, self.translation
        if isinstance(x, Motion):
            w = R @ x.angular
            return Motion(R @ x.linear + np.cross(p, w), w)
        if isinstance(x, Force):
            f = R @ x.linear
            return Force(f, R @ x.angular + np.cross(p, f))
        if isinstance(x, Inertia):
            return Inertia(x.mass, R @ x.lever + p, R @ x.inertia @ R.T)
        return R @ np.asarray(x, dtype=float) + p

    def act_inv(self, x):
        """Expresses in the child frame a quantity given in the parent frame

        Args:
            x (Union[Motion, Force, Inertia, np.ndarray]): a spatial quantity or a 3D point

        Returns:
            the transformed quantity, of the same type of x
        """
        R, p = self.rotation, self.translation
        if isinstance(x, Motion):
            return Motion(
                R.T @ (x.linear - np.cross(p, x.angular)), R.T @ x.angular
            )
        if isinstance(x, Force):
            return Force(R.T @ x.linear, R.T @ (x.angular - np.cross(p, x.linear)))
        if isinstance(x, Inertia):
            return Inertia(x.mass, R.T @ (x.lever - p), R.T @ x.inertia @ R)
        return R.T @ (np.asarray(x, dtype=float) - p)

    def act_motion_set(self, M: np.ndarray) -> np.ndarray:
        """Applies the action to every column of a 6xk motion matrix"""
        return self.action_matrix() @ M

    def act_force_set(self, F: np.ndarray) -> np.ndarray:
        """Applies the dual action to every column of a 6xk force matrix"""
        return self.dual_action_matrix() @ F

    def is_approx(self, other: "SE3", tol: float = 1e-9) -> bool:
        return np.allclose(self.rotation, other.rotation, atol=tol) and np.allclose(
            self.translation, other.translation, atol=tol
        )

    def __repr__(self) -> str:
        return f"SE3(rotation={self.rotation!r}, translation={self.translation!r})"
