"""
Value types shared by the kinematic solvers.

All problems and results are immutable dataclasses. Results are created fresh
per call and carry the wall-clock duration of the computation that produced
them, in microseconds.
"""

import time
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Callable, Optional, Sequence
from uuid import uuid4

Vector3 = tuple[float, float, float]
Quaternion = tuple[float, float, float, float]

# Produces a fresh, process-unique id string per call
IdFactory = Callable[[], str]

ZERO_VECTOR: Vector3 = (0.0, 0.0, 0.0)


def new_id() -> str:
    """Default id factory: a random UUID4 string."""
    return str(uuid4())


def elapsed_us(started: float) -> int:
    """Microseconds elapsed since a ``time.perf_counter()`` reading."""
    return int((time.perf_counter() - started) * 1_000_000)


class IntentType(str, Enum):
    """Coarse semantic label for a motion sample sequence."""

    IDLE = "idle"
    GRASP = "grasp"
    RELEASE = "release"
    TRAVERSE = "traverse"
    REACH = "reach"


class _Serializable:
    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


# -- Forward kinematics --


@dataclass(frozen=True)
class FkProblem:
    joint_angles: Sequence[float]
    link_lengths: Optional[Sequence[float]] = None


@dataclass(frozen=True)
class FkResult(_Serializable):
    end_effector_position: Vector3
    end_effector_orientation: Quaternion
    joint_positions: list[Vector3]
    elapsed_us: int


# -- Inverse kinematics --


@dataclass(frozen=True)
class IkProblem:
    """
    Inverse kinematics request.

    ``target_orientation`` is accepted and carried but not used by the solver.
    """

    target_position: Vector3
    target_orientation: Optional[Quaternion] = None
    joint_count: int = 7
    max_iterations: int = 100
    tolerance: float = 1e-6


@dataclass(frozen=True)
class IkSolution(_Serializable):
    solution_id: str
    joint_angles: list[float]
    iterations: int
    converged: bool
    error_distance: float
    elapsed_us: int


# -- Trajectory --


@dataclass(frozen=True)
class TrajectoryProblem:
    """
    Trajectory request.

    Each waypoint is a sequence of floats; only the first three components
    (x, y, z) are used and missing ones default to 0.
    """

    waypoints: Sequence[Sequence[float]]
    max_velocity: float = 1.0


@dataclass(frozen=True)
class TrajectoryPoint(_Serializable):
    position: Vector3
    velocity: Vector3
    time: float


@dataclass(frozen=True)
class TrajectoryResult(_Serializable):
    trajectory_id: str
    points: list[TrajectoryPoint]
    total_distance: float
    total_time: float
    max_velocity_reached: float
    elapsed_us: int


# -- Motion intent --


@dataclass(frozen=True)
class MotionSample:
    timestamp_ms: int
    position: Vector3
    velocity: Optional[Vector3] = None


@dataclass(frozen=True)
class IntentResult(_Serializable):
    intent_id: str
    compressed_bytes: int
    original_samples: int
    compression_ratio: float
    intent_type: IntentType
    direction: Vector3
    magnitude: float
    elapsed_us: int
