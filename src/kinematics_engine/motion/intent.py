"""
Motion intent compression.

Reduces a time series of motion samples to a single labeled descriptor: the
net displacement direction, its magnitude, and an intent label. The label is
a fixed threshold cascade over net displacement and average speed.
"""

import time
from typing import Sequence

import numpy as np

from kinematics_engine.motion.types import (
    ZERO_VECTOR,
    IdFactory,
    IntentResult,
    IntentType,
    MotionSample,
    Vector3,
    elapsed_us,
    new_id,
)

IDLE_MAGNITUDE = 0.01
GRASP_MAGNITUDE = 0.1
GRASP_SPEED = 0.05
# Vertical share of the displacement above which motion is a release
RELEASE_RISE_RATIO = 0.7
TRAVERSE_MAGNITUDE = 0.5
# Below this magnitude the direction is reported as the zero vector
DIRECTION_FLOOR = 1e-9

# 3 position floats of 8 bytes each
BYTES_PER_SAMPLE = 24
COMPRESSED_BYTES = 8


def average_speed(samples: Sequence[MotionSample]) -> float:
    """
    Mean velocity norm over all samples.

    Samples without a velocity add nothing to the sum but still count in
    the divisor.
    """
    if not samples:
        return 0.0
    total = sum(
        float(np.linalg.norm(s.velocity)) for s in samples if s.velocity is not None
    )
    return total / len(samples)


def classify_intent(displacement: np.ndarray, magnitude: float, speed: float) -> IntentType:
    """Label a net displacement; the first matching rule wins."""
    if magnitude < IDLE_MAGNITUDE:
        return IntentType.IDLE
    if magnitude < GRASP_MAGNITUDE and speed < GRASP_SPEED:
        return IntentType.GRASP
    if displacement[2] > magnitude * RELEASE_RISE_RATIO:
        return IntentType.RELEASE
    if magnitude > TRAVERSE_MAGNITUDE:
        return IntentType.TRAVERSE
    return IntentType.REACH


def compress_intent(
    samples: Sequence[MotionSample], id_factory: IdFactory = new_id
) -> IntentResult:
    """
    Summarize a motion sample sequence as one intent descriptor.

    Args:
        samples: Time-ordered samples. Timestamps are not used.
        id_factory: Produces the intent id.

    Returns:
        IntentResult. An empty sequence is reported as idle with zero
        compressed size and a zero compression ratio.
    """
    started = time.perf_counter()
    n = len(samples)

    if n == 0:
        return IntentResult(
            intent_id=id_factory(),
            compressed_bytes=0,
            original_samples=0,
            compression_ratio=0.0,
            intent_type=IntentType.IDLE,
            direction=ZERO_VECTOR,
            magnitude=0.0,
            elapsed_us=elapsed_us(started),
        )

    first = np.asarray(samples[0].position, dtype=float)
    last = np.asarray(samples[-1].position, dtype=float)
    displacement = last - first
    magnitude = float(np.linalg.norm(displacement))

    direction: Vector3 = ZERO_VECTOR
    if magnitude > DIRECTION_FLOOR:
        direction = tuple((displacement / magnitude).tolist())

    intent_type = classify_intent(displacement, magnitude, average_speed(samples))

    original_bytes = n * BYTES_PER_SAMPLE
    return IntentResult(
        intent_id=id_factory(),
        compressed_bytes=COMPRESSED_BYTES,
        original_samples=n,
        compression_ratio=original_bytes / COMPRESSED_BYTES,
        intent_type=intent_type,
        direction=direction,
        magnitude=magnitude,
        elapsed_us=elapsed_us(started),
    )
