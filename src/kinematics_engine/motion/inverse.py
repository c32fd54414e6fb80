"""
Iterative inverse kinematics solver.

A fixed-gain heuristic: every iteration evaluates forward kinematics with a
uniform link length of ``1 / joint_count``, measures the position error to the
target, and nudges each joint by a damped projection of the error vector onto
a per-joint phase direction. This is not a Jacobian pseudo-inverse; the
constants below define the solver's behavior and must not be retuned.

The loop is an explicit state machine (ITERATING -> CONVERGED | EXHAUSTED)
around the pure :func:`ik_step` update.
"""

import math
import sys
import time
from enum import Enum

import numpy as np

from kinematics_engine.motion.forward import chain_end_effector
from kinematics_engine.motion.types import (
    IdFactory,
    IkProblem,
    IkSolution,
    elapsed_us,
    new_id,
)

DAMPING = 0.1
# Weight of the z error in every joint update
Z_GAIN = 0.5
ANGLE_LIMIT = math.pi
# Reported error when no iteration ran
ERROR_SENTINEL = sys.float_info.max


class SolverState(Enum):
    """States of the IK iteration loop."""

    ITERATING = "iterating"
    CONVERGED = "converged"
    EXHAUSTED = "exhausted"


def joint_phases(joint_count: int) -> np.ndarray:
    """Phase ``(i + 1) / n`` of every joint i."""
    if joint_count == 0:
        return np.zeros(0)
    return np.arange(1, joint_count + 1, dtype=float) / joint_count


def ik_step(angles: np.ndarray, error_vector: np.ndarray) -> np.ndarray:
    """
    One damped update of the joint angles.

    Args:
        angles: Current joint angles, shape (n,).
        error_vector: Target minus current end-effector position, shape (3,).

    Returns:
        Updated angles, each clamped to [-pi, pi].
    """
    dx, dy, dz = error_vector
    phases = joint_phases(angles.size)
    updated = angles + DAMPING * (dx * np.cos(phases) + dy * np.sin(phases) + dz * Z_GAIN)
    return np.clip(updated, -ANGLE_LIMIT, ANGLE_LIMIT)


def solve_ik(problem: IkProblem, id_factory: IdFactory = new_id) -> IkSolution:
    """
    Search for joint angles placing the end effector at the target position.

    Never fails: when the iteration budget runs out the best-effort angles are
    returned with ``converged`` False. ``problem.target_orientation`` is not
    used.

    Args:
        problem: Target position, joint count, iteration budget and tolerance.
        id_factory: Produces the solution id.

    Returns:
        IkSolution with the angles, iterations executed, the converged flag
        and the last measured error distance.
    """
    started = time.perf_counter()

    n = problem.joint_count
    link_length = 1.0 / n if n else 0.0
    target = np.asarray(problem.target_position, dtype=float)

    angles = np.zeros(n)
    iterations = 0
    error = ERROR_SENTINEL
    state = SolverState.ITERATING

    while state is SolverState.ITERATING:
        if iterations >= problem.max_iterations:
            state = SolverState.EXHAUSTED
            break

        iterations += 1
        error_vector = target - chain_end_effector(angles, link_length)
        error = float(np.linalg.norm(error_vector))

        if error < problem.tolerance:
            state = SolverState.CONVERGED
        else:
            angles = ik_step(angles, error_vector)

    return IkSolution(
        solution_id=id_factory(),
        joint_angles=angles.tolist(),
        iterations=iterations,
        converged=error < problem.tolerance,
        error_distance=error,
        elapsed_us=elapsed_us(started),
    )
