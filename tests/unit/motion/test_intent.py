"""
Unit tests for motion intent compression.
"""

import pytest

from kinematics_engine.motion.intent import (
    COMPRESSED_BYTES,
    average_speed,
    compress_intent,
)
from kinematics_engine.motion.types import IntentType, MotionSample


def _path(*positions, velocity=None):
    return [
        MotionSample(timestamp_ms=i * 10, position=p, velocity=velocity)
        for i, p in enumerate(positions)
    ]


@pytest.mark.unit
class TestAverageSpeed:
    def test_empty(self):
        assert average_speed([]) == 0.0

    def test_divides_by_total_sample_count(self):
        samples = [
            MotionSample(0, (0.0, 0.0, 0.0), velocity=(3.0, 4.0, 0.0)),
            MotionSample(1, (0.0, 0.0, 0.0)),
        ]
        assert average_speed(samples) == pytest.approx(2.5)


@pytest.mark.unit
class TestCompressIntent:
    def test_empty_is_idle(self):
        result = compress_intent([])
        assert result.intent_type is IntentType.IDLE
        assert result.compressed_bytes == 0
        assert result.original_samples == 0
        assert result.compression_ratio == 0.0
        assert result.direction == (0.0, 0.0, 0.0)
        assert result.magnitude == 0.0

    def test_zero_net_displacement_is_idle(self):
        samples = _path((0.0, 0.0, 0.0), (5.0, 5.0, 5.0), (0.0, 0.0, 0.0))
        result = compress_intent(samples)
        assert result.intent_type is IntentType.IDLE
        assert result.direction == (0.0, 0.0, 0.0)
        assert result.magnitude == 0.0

    @pytest.mark.parametrize("n", [1, 2, 4, 10])
    def test_compression_ratio(self, n):
        samples = _path(*[(float(i), 0.0, 0.0) for i in range(n)])
        result = compress_intent(samples)
        assert result.original_samples == n
        assert result.compressed_bytes == COMPRESSED_BYTES
        assert result.compression_ratio == 3.0 * n

    def test_direction_is_unit_vector(self):
        result = compress_intent(_path((0.0, 0.0, 0.0), (3.0, 4.0, 0.0)))
        assert result.magnitude == pytest.approx(5.0)
        assert result.direction == pytest.approx((0.6, 0.8, 0.0))

    def test_grasp(self):
        result = compress_intent(_path((0.0, 0.0, 0.0), (0.05, 0.0, 0.0)))
        assert result.intent_type is IntentType.GRASP
        assert result.direction == pytest.approx((1.0, 0.0, 0.0))

    def test_small_fast_motion_is_not_grasp(self):
        samples = _path((0.0, 0.0, 0.0), (0.05, 0.0, 0.0), velocity=(0.1, 0.0, 0.0))
        assert compress_intent(samples).intent_type is IntentType.REACH

    def test_samples_without_velocity_dilute_average(self):
        samples = _path((0.0, 0.0, 0.0), (0.01, 0.0, 0.0), (0.03, 0.0, 0.0), (0.05, 0.0, 0.0))
        samples[0] = MotionSample(0, (0.0, 0.0, 0.0), velocity=(0.12, 0.0, 0.0))
        # 0.12 / 4 samples = 0.03, below the grasp speed threshold
        assert compress_intent(samples).intent_type is IntentType.GRASP

    def test_release(self):
        result = compress_intent(_path((0.0, 0.0, 0.0), (0.1, 0.0, 0.3)))
        assert result.intent_type is IntentType.RELEASE

    def test_release_checked_before_traverse(self):
        result = compress_intent(_path((0.0, 0.0, 0.0), (0.0, 0.0, 2.0)))
        assert result.intent_type is IntentType.RELEASE

    def test_downward_motion_is_not_release(self):
        result = compress_intent(_path((0.0, 0.0, 2.0), (0.0, 0.0, 0.0)))
        assert result.intent_type is IntentType.TRAVERSE

    def test_traverse(self):
        result = compress_intent(_path((0.0, 0.0, 0.0), (1.0, 0.0, 0.0)))
        assert result.intent_type is IntentType.TRAVERSE

    def test_reach(self):
        result = compress_intent(_path((0.0, 0.0, 0.0), (0.3, 0.0, 0.0)))
        assert result.intent_type is IntentType.REACH

    def test_timestamps_unused(self):
        ordered = _path((0.0, 0.0, 0.0), (0.3, 0.1, 0.0))
        shuffled = [
            MotionSample(timestamp_ms=999, position=s.position, velocity=s.velocity)
            for s in ordered
        ]
        a, b = compress_intent(ordered), compress_intent(shuffled)
        assert (a.intent_type, a.direction, a.magnitude) == (b.intent_type, b.direction, b.magnitude)

    def test_injected_id_factory(self, id_factory):
        assert compress_intent([], id_factory=id_factory).intent_id == "id-1"
