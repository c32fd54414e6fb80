"""
Motion module - Kinematic solvers.

This module provides:
- Forward kinematics for serial chains (cumulative-angle model)
- Iterative heuristic inverse kinematics
- Trajectory time-parameterization with a cruise-speed profile
- Motion intent compression and classification

All solvers are pure functions over immutable values and never raise for
numeric input.
"""

from kinematics_engine.motion.forward import forward_kinematics
from kinematics_engine.motion.intent import compress_intent
from kinematics_engine.motion.inverse import SolverState, ik_step, solve_ik
from kinematics_engine.motion.trajectory import generate_trajectory
from kinematics_engine.motion.types import (
    FkProblem,
    FkResult,
    IkProblem,
    IkSolution,
    IntentResult,
    IntentType,
    MotionSample,
    TrajectoryPoint,
    TrajectoryProblem,
    TrajectoryResult,
)

__all__ = [
    "forward_kinematics",
    "solve_ik",
    "ik_step",
    "SolverState",
    "generate_trajectory",
    "compress_intent",
    "FkProblem",
    "FkResult",
    "IkProblem",
    "IkSolution",
    "IntentResult",
    "IntentType",
    "MotionSample",
    "TrajectoryPoint",
    "TrajectoryProblem",
    "TrajectoryResult",
]
