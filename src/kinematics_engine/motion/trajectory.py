"""
Trajectory time-parameterization over Cartesian waypoints.

Approximates a trapezoidal velocity profile with a fixed cruise speed of 80%
of the velocity cap on every segment. One output point per input waypoint,
in input order.

A point's velocity uses the speed of its outgoing segment, not the incoming
one, so the first point of a path already moves at cruise speed.
"""

import math
import time
from typing import Sequence

import numpy as np

from kinematics_engine.motion.types import (
    ZERO_VECTOR,
    IdFactory,
    TrajectoryPoint,
    TrajectoryProblem,
    TrajectoryResult,
    Vector3,
    elapsed_us,
    new_id,
)

# Cruise speed as a fraction of the velocity cap
CRUISE_FACTOR = 0.8
# Floor on segment length when normalizing a direction
DIRECTION_EPSILON = 1e-9


def waypoint_position(waypoint: Sequence[float]) -> np.ndarray:
    """First three components of a waypoint as (x, y, z), zero-filled."""
    position = np.zeros(3)
    head = list(waypoint[:3])
    position[: len(head)] = head
    return position


def segment_timing(distance: float, cruise_speed: float) -> tuple[float, float]:
    """
    Traversal time and speed of one segment.

    Returns:
        ``(time, speed)``. A zero-length segment takes no time and has zero
        speed.
    """
    segment_time = 0.0
    if distance > 0.0:
        segment_time = distance / cruise_speed if cruise_speed else math.inf
    speed = distance / segment_time if segment_time > 0.0 else 0.0
    return segment_time, speed


def generate_trajectory(
    problem: TrajectoryProblem, id_factory: IdFactory = new_id
) -> TrajectoryResult:
    """
    Time-stamp and velocity-annotate a waypoint path.

    Every segment is traversed at cruise speed. A point's ``time`` is the
    cumulative time to reach it. Its velocity is the unit direction toward
    the next waypoint scaled by that segment's speed; the last point has zero
    velocity.

    Args:
        problem: Ordered waypoints and the velocity cap.
        id_factory: Produces the trajectory id.

    Returns:
        TrajectoryResult with one point per waypoint plus distance, time and
        peak speed totals. An empty path yields no points and zero totals.
    """
    started = time.perf_counter()

    positions = [waypoint_position(w) for w in problem.waypoints]
    cruise_speed = problem.max_velocity * CRUISE_FACTOR
    # distances[i] is the length of the segment ending at waypoint i
    distances = [0.0] + [
        float(np.linalg.norm(b - a)) for a, b in zip(positions, positions[1:])
    ]

    points: list[TrajectoryPoint] = []
    total_distance = 0.0
    cumulative_time = 0.0
    peak_speed = 0.0

    for i, position in enumerate(positions):
        segment_time, speed = segment_timing(distances[i], cruise_speed)
        total_distance += distances[i]
        cumulative_time += segment_time
        if speed > peak_speed:
            peak_speed = speed

        velocity: Vector3 = ZERO_VECTOR
        if i + 1 < len(positions):
            delta = positions[i + 1] - position
            length = max(distances[i + 1], DIRECTION_EPSILON)
            _, outgoing_speed = segment_timing(distances[i + 1], cruise_speed)
            velocity = tuple((delta / length * outgoing_speed).tolist())

        points.append(TrajectoryPoint(
            position=tuple(position.tolist()),
            velocity=velocity,
            time=cumulative_time,
        ))

    return TrajectoryResult(
        trajectory_id=id_factory(),
        points=points,
        total_distance=total_distance,
        total_time=cumulative_time,
        max_velocity_reached=peak_speed,
        elapsed_us=elapsed_us(started),
    )
