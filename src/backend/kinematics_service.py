"""
Kinematics service for the engine backend.

Wraps the pure solvers in ``kinematics_engine.motion`` with the per-process
concerns the HTTP layer needs: default request values, id generation, solve
counters, and structured logging of every completed request. Results are
returned as plain dicts in the wire shape the frontend expects.
"""

import threading
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from kinematics_engine.core.chains import get_chain, list_chains
from kinematics_engine.core.logging import get_logger
from kinematics_engine.motion import (
    FkProblem,
    IkProblem,
    MotionSample,
    TrajectoryProblem,
    compress_intent,
    forward_kinematics,
    generate_trajectory,
    solve_ik,
)
from kinematics_engine.motion.types import IdFactory, new_id

logger = get_logger(__name__)

DEFAULT_JOINT_COUNT = 7
DEFAULT_MAX_ITERATIONS = 100
DEFAULT_TOLERANCE = 1e-6
DEFAULT_MAX_VELOCITY = 1.0

COUNTER_NAMES = (
    "total_ik_solves",
    "total_fk_solves",
    "total_compressions",
    "total_trajectories",
)


@dataclass
class EngineStats:
    """
    Per-process solve counters.

    Each increment is atomic; snapshots are not guaranteed to be consistent
    across counters.
    """

    total_ik_solves: int = 0
    total_fk_solves: int = 0
    total_compressions: int = 0
    total_trajectories: int = 0
    _lock: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False, compare=False
    )

    def increment(self, counter: str) -> None:
        if counter not in COUNTER_NAMES:
            raise ValueError(f"Unknown counter: {counter}")
        with self._lock:
            setattr(self, counter, getattr(self, counter) + 1)

    def snapshot(self) -> Dict[str, int]:
        with self._lock:
            return {name: getattr(self, name) for name in COUNTER_NAMES}

    @property
    def total_solves(self) -> int:
        """IK plus FK solves."""
        with self._lock:
            return self.total_ik_solves + self.total_fk_solves


class KinematicsService:
    """Service for kinematic solves and the chain catalog."""

    def __init__(self, id_factory: IdFactory = new_id) -> None:
        self._id_factory = id_factory
        self.stats = EngineStats()

    # ── Chain catalog ──────────────────────────────────────────────────────

    def get_chains(self) -> List[Dict[str, Any]]:
        return [chain.to_dict() for chain in list_chains()]

    def get_chain(self, chain_id: str) -> Dict[str, Any]:
        """Raises ChainNotFoundError for an unknown id."""
        return get_chain(chain_id).to_dict()

    # ── Solvers ────────────────────────────────────────────────────────────

    def solve_ik(
        self,
        target_position: Sequence[float],
        target_orientation: Optional[Sequence[float]] = None,
        joint_count: Optional[int] = None,
        max_iterations: Optional[int] = None,
        tolerance: Optional[float] = None,
    ) -> Dict[str, Any]:
        """Solve IK for a target position. Missing values use the engine defaults."""
        problem = IkProblem(
            target_position=tuple(target_position),
            target_orientation=tuple(target_orientation) if target_orientation else None,
            joint_count=DEFAULT_JOINT_COUNT if joint_count is None else joint_count,
            max_iterations=DEFAULT_MAX_ITERATIONS if max_iterations is None else max_iterations,
            tolerance=DEFAULT_TOLERANCE if tolerance is None else tolerance,
        )
        solution = solve_ik(problem, id_factory=self._id_factory)
        self.stats.increment("total_ik_solves")

        logger.info(
            "ik_solve_complete",
            joint_count=problem.joint_count,
            iterations=solution.iterations,
            converged=solution.converged,
            error_distance=solution.error_distance,
            elapsed_us=solution.elapsed_us,
        )
        return solution.to_dict()

    def solve_fk(
        self,
        joint_angles: Sequence[float],
        link_lengths: Optional[Sequence[float]] = None,
    ) -> Dict[str, Any]:
        result = forward_kinematics(FkProblem(joint_angles=joint_angles, link_lengths=link_lengths))
        self.stats.increment("total_fk_solves")

        logger.info(
            "fk_solve_complete",
            joint_count=len(joint_angles),
            elapsed_us=result.elapsed_us,
        )
        return result.to_dict()

    def compress_intent(self, samples: Sequence[Dict[str, Any]]) -> Dict[str, Any]:
        """
        Classify a motion sample sequence.

        Args:
            samples: Dicts with ``timestamp_ms``, ``position`` and optional
                ``velocity``.
        """
        motion = [
            MotionSample(
                timestamp_ms=s.get("timestamp_ms", 0),
                position=tuple(s["position"]),
                velocity=tuple(s["velocity"]) if s.get("velocity") is not None else None,
            )
            for s in samples
        ]
        result = compress_intent(motion, id_factory=self._id_factory)
        # An empty sequence is not a compression
        if motion:
            self.stats.increment("total_compressions")

        logger.info(
            "intent_compressed",
            samples=result.original_samples,
            intent_type=result.intent_type.value,
            magnitude=result.magnitude,
            elapsed_us=result.elapsed_us,
        )
        data = result.to_dict()
        data["intent_type"] = result.intent_type.value
        return data

    def optimize_trajectory(
        self,
        waypoints: Sequence[Sequence[float]],
        max_velocity: Optional[float] = None,
    ) -> Dict[str, Any]:
        problem = TrajectoryProblem(
            waypoints=waypoints,
            max_velocity=DEFAULT_MAX_VELOCITY if max_velocity is None else max_velocity,
        )
        result = generate_trajectory(problem, id_factory=self._id_factory)
        self.stats.increment("total_trajectories")

        logger.info(
            "trajectory_generated",
            waypoints=len(result.points),
            total_distance=result.total_distance,
            total_time=result.total_time,
            elapsed_us=result.elapsed_us,
        )
        data = result.to_dict()
        data["optimized_waypoints"] = data.pop("points")
        return data
