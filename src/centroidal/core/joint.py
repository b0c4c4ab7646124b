# Copyright (C) Istituto Italiano di Tecnologia (IIT). All rights reserved.

import abc
import dataclasses
import warnings
from typing import List, Optional, Sequence, Union

import numpy as np
import numpy.typing as npt

from centroidal.core.constants import JointType
from centroidal.core.spatial_math import (
    SE3,
    Motion,
    R_from_axis_angle,
    R_from_quaternion,
    exp3,
    exp6,
    quaternion_from_R,
)


@dataclasses.dataclass
class JointData:
    """Kinematic quantities of one joint, recomputed at every call

    Attributes:
        M (SE3): placement of the joint child frame in the joint parent frame
        S (np.ndarray): 6 x nv motion subspace, expressed in the child frame
        v (Motion): joint velocity S @ v_joint
        c (Motion): joint bias acceleration
        dS (np.ndarray): time derivative of S in the child frame
    """

    M: SE3
    S: np.ndarray
    v: Motion
    c: Motion
    dS: np.ndarray


class Joint(abc.ABC):
    """Base Joint class.

    A joint owns the slices [idx_q, idx_q + nq) of the configuration vector and
    [idx_v, idx_v + nv) of the velocity vector. The indexes are set by the Model
    when the joint is added.
    """

    type: JointType

    def __init__(self, name: Optional[str] = None) -> None:
        self.name = name
        self.id: Optional[int] = None
        self.idx_q: Optional[int] = None
        self.idx_v: Optional[int] = None

    @property
    @abc.abstractmethod
    def nq(self) -> int:
        pass

    @property
    @abc.abstractmethod
    def nv(self) -> int:
        pass

    @abc.abstractmethod
    def transform(self, q_joint: np.ndarray) -> SE3:
        """
        Args:
            q_joint (np.ndarray): the joint configuration

        Returns:
            SE3: the placement of the child frame in the parent frame
        """
        pass

    @abc.abstractmethod
    def motion_subspace(self, q_joint: np.ndarray) -> np.ndarray:
        """
        Args:
            q_joint (np.ndarray): the joint configuration

        Returns:
            np.ndarray: the 6 x nv motion subspace of the joint, in the child frame
        """
        pass

    @abc.abstractmethod
    def neutral(self) -> np.ndarray:
        """
        Returns:
            np.ndarray: the joint configuration corresponding to the identity placement
        """
        pass

    @abc.abstractmethod
    def integrate(self, q_joint: np.ndarray, v_joint: np.ndarray) -> np.ndarray:
        """
        Args:
            q_joint (np.ndarray): the joint configuration
            v_joint (np.ndarray): the joint velocity, applied for a unit time

        Returns:
            np.ndarray: the joint configuration reached moving at v_joint from q_joint
        """
        pass

    @abc.abstractmethod
    def random_configuration(self, rng: np.random.Generator) -> np.ndarray:
        pass

    def set_indexes(self, id: int, idx_q: int, idx_v: int) -> None:
        self.id = id
        self.idx_q = idx_q
        self.idx_v = idx_v

    def joint_config_selector(self, q: np.ndarray) -> np.ndarray:
        return q[self.idx_q : self.idx_q + self.nq]

    def joint_velocity_selector(self, v: np.ndarray) -> np.ndarray:
        return v[self.idx_v : self.idx_v + self.nv]

    def joint_cols(self, matrix: np.ndarray) -> np.ndarray:
        """
        Args:
            matrix (np.ndarray): a matrix with nv columns

        Returns:
            np.ndarray: the writable view on the columns owned by the joint
        """
        return matrix[..., self.idx_v : self.idx_v + self.nv]

    def calc(self, q: np.ndarray, v: Optional[np.ndarray] = None) -> JointData:
        """Computes the joint kinematics

        Args:
            q (np.ndarray): the full configuration vector
            v (np.ndarray, optional): the full velocity vector

        Returns:
            JointData: the joint kinematic quantities
        """
        q_joint = self.joint_config_selector(q)
        S = self.motion_subspace(q_joint)
        v_J = (
            Motion.zero()
            if v is None
            else Motion.from_vector(S @ self.joint_velocity_selector(v))
        )
        return JointData(
            M=self.transform(q_joint),
            S=S,
            v=v_J,
            c=Motion.zero(),
            dS=np.zeros((6, self.nv)),
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, id={self.id}, nq={self.nq}, nv={self.nv})"


def _normalize_axis(axis: npt.ArrayLike) -> np.ndarray:
    axis = np.asarray(axis, dtype=float).reshape(3)
    norm = np.linalg.norm(axis)
    if norm == 0.0:
        raise ValueError("The joint axis must be non-zero")
    if not np.isclose(norm, 1.0):
        warnings.warn(f"The joint axis {axis} is not normalized, normalizing it")
    return axis / norm


class JointFixed(Joint):
    """A joint without degrees of freedom, carrying only a body"""

    type = JointType.FIXED

    @property
    def nq(self) -> int:
        return 0

    @property
    def nv(self) -> int:
        return 0

    def transform(self, q_joint: np.ndarray) -> SE3:
        return SE3.identity()

    def motion_subspace(self, q_joint: np.ndarray) -> np.ndarray:
        return np.zeros((6, 0))

    def neutral(self) -> np.ndarray:
        return np.zeros(0)

    def integrate(self, q_joint: np.ndarray, v_joint: np.ndarray) -> np.ndarray:
        return np.zeros(0)

    def random_configuration(self, rng: np.random.Generator) -> np.ndarray:
        return np.zeros(0)


class JointRevolute(Joint):
    """Rotation about a fixed axis of the parent frame"""

    type = JointType.REVOLUTE

    def __init__(self, axis: npt.ArrayLike = (0.0, 0.0, 1.0), name: Optional[str] = None):
        super().__init__(name)
        self.axis = _normalize_axis(axis)

    @property
    def nq(self) -> int:
        return 1

    @property
    def nv(self) -> int:
        return 1

    def transform(self, q_joint: np.ndarray) -> SE3:
        return SE3(R_from_axis_angle(self.axis, q_joint[0]), np.zeros(3))

    def motion_subspace(self, q_joint: np.ndarray) -> np.ndarray:
        return np.concatenate([np.zeros(3), self.axis]).reshape(6, 1)

    def neutral(self) -> np.ndarray:
        return np.zeros(1)

    def integrate(self, q_joint: np.ndarray, v_joint: np.ndarray) -> np.ndarray:
        return q_joint + v_joint

    def random_configuration(self, rng: np.random.Generator) -> np.ndarray:
        return rng.uniform(-np.pi, np.pi, 1)


class JointPrismatic(Joint):
    """Translation along a fixed axis of the parent frame"""

    type = JointType.PRISMATIC

    def __init__(self, axis: npt.ArrayLike = (0.0, 0.0, 1.0), name: Optional[str] = None):
        super().__init__(name)
        self.axis = _normalize_axis(axis)

    @property
    def nq(self) -> int:
        return 1

    @property
    def nv(self) -> int:
        return 1

    def transform(self, q_joint: np.ndarray) -> SE3:
        return SE3(np.eye(3), self.axis * q_joint[0])

    def motion_subspace(self, q_joint: np.ndarray) -> np.ndarray:
        return np.concatenate([self.axis, np.zeros(3)]).reshape(6, 1)

    def neutral(self) -> np.ndarray:
        return np.zeros(1)

    def integrate(self, q_joint: np.ndarray, v_joint: np.ndarray) -> np.ndarray:
        return q_joint + v_joint

    def random_configuration(self, rng: np.random.Generator) -> np.ndarray:
        return rng.uniform(-1.0, 1.0, 1)


class JointSpherical(Joint):
    """Ball joint. The configuration is a unit quaternion [x, y, z, w], the
    velocity is the angular velocity expressed in the child frame."""

    type = JointType.SPHERICAL

    @property
    def nq(self) -> int:
        return 4

    @property
    def nv(self) -> int:
        return 3

    def transform(self, q_joint: np.ndarray) -> SE3:
        return SE3(R_from_quaternion(q_joint), np.zeros(3))

    def motion_subspace(self, q_joint: np.ndarray) -> np.ndarray:
        S = np.zeros((6, 3))
        S[3:, :] = np.eye(3)
        return S

    def neutral(self) -> np.ndarray:
        return np.array([0.0, 0.0, 0.0, 1.0])

    def integrate(self, q_joint: np.ndarray, v_joint: np.ndarray) -> np.ndarray:
        return quaternion_from_R(R_from_quaternion(q_joint) @ exp3(v_joint))

    def random_configuration(self, rng: np.random.Generator) -> np.ndarray:
        quat = rng.normal(size=4)
        return quat / np.linalg.norm(quat)


class JointPlanar(Joint):
    """Motion in the XY plane of the parent frame. The configuration is
    [x, y, theta], the velocity [vx, vy, wz] is expressed in the child frame."""

    type = JointType.PLANAR

    @property
    def nq(self) -> int:
        return 3

    @property
    def nv(self) -> int:
        return 3

    def transform(self, q_joint: np.ndarray) -> SE3:
        return SE3(
            R_from_axis_angle([0.0, 0.0, 1.0], q_joint[2]),
            np.array([q_joint[0], q_joint[1], 0.0]),
        )

    def motion_subspace(self, q_joint: np.ndarray) -> np.ndarray:
        S = np.zeros((6, 3))
        S[0, 0] = 1.0
        S[1, 1] = 1.0
        S[5, 2] = 1.0
        return S

    def neutral(self) -> np.ndarray:
        return np.zeros(3)

    def integrate(self, q_joint: np.ndarray, v_joint: np.ndarray) -> np.ndarray:
        M = self.transform(q_joint) * exp6(Motion.from_vector(self.motion_subspace(q_joint) @ v_joint))
        return np.array(
            [M.translation[0], M.translation[1], q_joint[2] + v_joint[2]]
        )

    def random_configuration(self, rng: np.random.Generator) -> np.ndarray:
        return np.concatenate([rng.uniform(-1.0, 1.0, 2), rng.uniform(-np.pi, np.pi, 1)])


class JointFreeFlyer(Joint):
    """Six degrees of freedom joint. The configuration is [x, y, z, qx, qy, qz, qw],
    the velocity is the spatial velocity expressed in the child frame."""

    type = JointType.FREE_FLYER

    @property
    def nq(self) -> int:
        return 7

    @property
    def nv(self) -> int:
        return 6

    def transform(self, q_joint: np.ndarray) -> SE3:
        return SE3(R_from_quaternion(q_joint[3:]), q_joint[:3])

    def motion_subspace(self, q_joint: np.ndarray) -> np.ndarray:
        return np.eye(6)

    def neutral(self) -> np.ndarray:
        return np.array([0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 1.0])

    def integrate(self, q_joint: np.ndarray, v_joint: np.ndarray) -> np.ndarray:
        M = self.transform(q_joint) * exp6(Motion.from_vector(v_joint))
        return np.concatenate([M.translation, quaternion_from_R(M.rotation)])

    def random_configuration(self, rng: np.random.Generator) -> np.ndarray:
        quat = rng.normal(size=4)
        return np.concatenate([rng.uniform(-1.0, 1.0, 3), quat / np.linalg.norm(quat)])


class JointComposite(Joint):
    """A serial chain of joints acting as a single joint.

    Args:
        joints (Sequence[Joint]): the sub-joints, from the parent to the child side
        placements (Sequence[SE3], optional): the placement of each sub-joint in the
            child frame of the previous one. Defaults to identities.
    """

    type = JointType.COMPOSITE

    def __init__(
        self,
        joints: Sequence[Joint],
        placements: Optional[Sequence[SE3]] = None,
        name: Optional[str] = None,
    ) -> None:
        super().__init__(name)
        if len(joints) == 0:
            raise ValueError("A composite joint needs at least one sub-joint")
        if placements is None:
            placements = [SE3.identity() for _ in joints]
        if len(placements) != len(joints):
            raise ValueError(
                f"Got {len(placements)} placements for {len(joints)} sub-joints"
            )
        self.joints: List[Joint] = list(joints)
        self.placements: List[SE3] = list(placements)

    @property
    def nq(self) -> int:
        return sum(joint.nq for joint in self.joints)

    @property
    def nv(self) -> int:
        return sum(joint.nv for joint in self.joints)

    def set_indexes(self, id: int, idx_q: int, idx_v: int) -> None:
        super().set_indexes(id, idx_q, idx_v)
        for joint in self.joints:
            joint.set_indexes(id, idx_q, idx_v)
            idx_q += joint.nq
            idx_v += joint.nv

    def transform(self, q_joint: np.ndarray) -> SE3:
        M = SE3.identity()
        for joint, placement, q_k in zip(
            self.joints, self.placements, self._split(q_joint, "nq")
        ):
            M = M * placement * joint.transform(q_k)
        return M

    def motion_subspace(self, q_joint: np.ndarray) -> np.ndarray:
        M = SE3.identity()
        chain = []
        for joint, placement, q_k in zip(
            self.joints, self.placements, self._split(q_joint, "nq")
        ):
            M = M * placement * joint.transform(q_k)
            chain.append((M, joint.motion_subspace(q_k)))
        # each sub-joint subspace moved to the last frame of the chain
        M_inv = M.inverse()
        return np.hstack([(M_inv * M_k).act_motion_set(S_k) for M_k, S_k in chain])

    def calc(self, q: np.ndarray, v: Optional[np.ndarray] = None) -> JointData:
        M = SE3.identity()
        v_J = Motion.zero()
        c = Motion.zero()
        chain = []
        for joint, placement in zip(self.joints, self.placements):
            jdata = joint.calc(q, v)
            M_rel = placement * jdata.M
            M = M * M_rel
            if v is not None:
                v_J = M_rel.act_inv(v_J) + jdata.v
                c = M_rel.act_inv(c) + jdata.c + (v_J ^ jdata.v)
            chain.append((M, v_J, jdata))

        S = np.zeros((6, self.nv))
        dS = np.zeros((6, self.nv))
        col = 0
        for M_k, v_k, jdata in chain:
            # the last frame seen from the k-th sub-joint frame
            k_M_n = M_k.inverse() * M
            n_M_k = k_M_n.inverse()
            nv_k = jdata.S.shape[1]
            S_k = n_M_k.act_motion_set(jdata.S)
            S[:, col : col + nv_k] = S_k
            if v is not None:
                v_rel = v_J - k_M_n.act_inv(v_k)
                dS[:, col : col + nv_k] = (
                    n_M_k.act_motion_set(jdata.dS) - v_rel.act_set(S_k)
                )
            col += nv_k

        return JointData(M=M, S=S, v=v_J, c=c, dS=dS)

    def neutral(self) -> np.ndarray:
        return np.concatenate([joint.neutral() for joint in self.joints])

    def integrate(self, q_joint: np.ndarray, v_joint: np.ndarray) -> np.ndarray:
        return np.concatenate(
            [
                joint.integrate(q_k, v_k)
                for joint, q_k, v_k in zip(
                    self.joints,
                    self._split(q_joint, "nq"),
                    self._split(v_joint, "nv"),
                )
            ]
        )

    def random_configuration(self, rng: np.random.Generator) -> np.ndarray:
        return np.concatenate([joint.random_configuration(rng) for joint in self.joints])

    def _split(self, x: np.ndarray, size: str) -> List[np.ndarray]:
        parts = []
        start = 0
        for joint in self.joints:
            n = getattr(joint, size)
            parts.append(x[start : start + n])
            start += n
        return parts


JointModel = Union[
    JointFixed,
    JointRevolute,
    JointPrismatic,
    JointSpherical,
    JointPlanar,
    JointFreeFlyer,
    JointComposite,
]
