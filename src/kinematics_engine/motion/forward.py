"""
Forward kinematics for planar-with-droop serial chains.

Each joint adds its angle to a running cumulative rotation and advances the
chain by one link along that heading. The z coordinate gets a shallow,
non-physical excursion coupled to the cumulative angle, which gives the chain
a 3D "droop" without composing real 3D rotations. The end-effector
orientation is a single-axis quaternion built from the final cumulative
angle.
"""

import time
from typing import Optional, Sequence

import numpy as np

from kinematics_engine.motion.types import (
    FkProblem,
    FkResult,
    Quaternion,
    Vector3,
    elapsed_us,
)

# Uniform link length when the request carries no link lengths at all
DEFAULT_LINK_LENGTH = 0.2
# Link length for joints past the end of a short link-length list
FALLBACK_LINK_LENGTH = 0.15
# Gain of the z excursion relative to the link length
Z_DROOP = 0.3


def resolve_link_lengths(
    joint_count: int, link_lengths: Optional[Sequence[float]] = None
) -> np.ndarray:
    """
    Per-joint link lengths for a chain of ``joint_count`` joints.

    Args:
        joint_count: Number of joints in the chain.
        link_lengths: Requested lengths. Entries past ``joint_count`` are
            ignored and missing entries fall back to 0.15. When None, every
            link is 0.2.

    Returns:
        Array of shape (joint_count,).
    """
    if link_lengths is None:
        return np.full(joint_count, DEFAULT_LINK_LENGTH)

    lengths = np.full(joint_count, FALLBACK_LINK_LENGTH)
    supplied = np.asarray(link_lengths, dtype=float)[:joint_count]
    lengths[: supplied.size] = supplied
    return lengths


def chain_positions(joint_angles: Sequence[float], link_lengths: np.ndarray) -> np.ndarray:
    """
    Positions of every joint along the chain, origin included.

    Args:
        joint_angles: Joint angles in radians.
        link_lengths: One length per joint.

    Returns:
        Array of shape (n + 1, 3). Row 0 is always the origin.
    """
    cumulative = np.cumsum(np.asarray(joint_angles, dtype=float))
    steps = np.column_stack((
        link_lengths * np.cos(cumulative),
        link_lengths * np.sin(cumulative),
        link_lengths * np.sin(cumulative * 0.5) * Z_DROOP,
    ))
    return np.vstack((np.zeros(3), np.cumsum(steps, axis=0)))


def chain_end_effector(joint_angles: Sequence[float], link_length: float) -> np.ndarray:
    """End-effector position for a chain with a uniform link length."""
    lengths = np.full(len(joint_angles), link_length)
    return chain_positions(joint_angles, lengths)[-1]


def orientation_from_angle(cumulative_angle: float) -> Quaternion:
    """Quaternion (x, y, z, w) for a rotation of ``cumulative_angle`` about z."""
    half = cumulative_angle * 0.5
    return (0.0, 0.0, float(np.sin(half)), float(np.cos(half)))


def forward_kinematics(problem: FkProblem) -> FkResult:
    """
    Evaluate the chain pose for a joint-angle vector.

    Pure and deterministic. An empty angle vector yields only the origin and
    the identity orientation.

    Args:
        problem: Joint angles and optional per-link lengths.

    Returns:
        FkResult with the end-effector pose and all n + 1 joint positions.
    """
    started = time.perf_counter()

    n = len(problem.joint_angles)
    lengths = resolve_link_lengths(n, problem.link_lengths)
    positions = chain_positions(problem.joint_angles, lengths)
    cumulative = np.cumsum(np.asarray(problem.joint_angles, dtype=float))
    final_angle = float(cumulative[-1]) if n else 0.0

    joint_positions: list[Vector3] = [tuple(p) for p in positions.tolist()]
    return FkResult(
        end_effector_position=joint_positions[-1],
        end_effector_orientation=orientation_from_angle(final_angle),
        joint_positions=joint_positions,
        elapsed_us=elapsed_us(started),
    )
