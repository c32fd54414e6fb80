"""Tests for the kinematics service layer."""

import threading

import pytest

from backend.kinematics_service import EngineStats
from kinematics_engine.core.exceptions import ChainNotFoundError


@pytest.mark.unit
class TestEngineStats:
    def test_starts_at_zero(self):
        assert EngineStats().snapshot() == {
            "total_ik_solves": 0,
            "total_fk_solves": 0,
            "total_compressions": 0,
            "total_trajectories": 0,
        }

    def test_total_solves(self):
        stats = EngineStats()
        stats.increment("total_ik_solves")
        stats.increment("total_fk_solves")
        stats.increment("total_trajectories")
        assert stats.total_solves == 2

    def test_unknown_counter(self):
        with pytest.raises(ValueError):
            EngineStats().increment("total_teleports")

    def test_concurrent_increments(self):
        stats = EngineStats()

        def bump():
            for _ in range(1000):
                stats.increment("total_ik_solves")

        threads = [threading.Thread(target=bump) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert stats.snapshot()["total_ik_solves"] == 8000


@pytest.mark.unit
class TestKinematicsService:
    def test_solve_ik_defaults(self, service):
        data = service.solve_ik([1.0, 0.0, 0.0])
        assert data["solution_id"] == "id-1"
        assert len(data["joint_angles"]) == 7
        assert service.stats.total_ik_solves == 1

    def test_solve_fk(self, service):
        data = service.solve_fk([0.0, 0.0], [0.5, 0.5])
        assert data["end_effector_position"] == pytest.approx((1.0, 0.0, 0.0))
        assert service.stats.total_fk_solves == 1

    def test_compress_intent(self, service):
        data = service.compress_intent([
            {"timestamp_ms": 0, "position": [0.0, 0.0, 0.0], "velocity": None},
            {"timestamp_ms": 5, "position": [0.3, 0.0, 0.0], "velocity": [0.1, 0.0, 0.0]},
        ])
        assert data["intent_type"] == "reach"
        assert data["intent_id"] == "id-1"
        assert service.stats.total_compressions == 1

    def test_empty_compression_not_counted(self, service):
        data = service.compress_intent([])
        assert data["intent_type"] == "idle"
        assert service.stats.total_compressions == 0

    def test_optimize_trajectory(self, service):
        data = service.optimize_trajectory([[0, 0, 0], [0, 2, 0]], max_velocity=None)
        assert "points" not in data
        assert len(data["optimized_waypoints"]) == 2
        assert data["total_time"] == pytest.approx(2.5)
        assert service.stats.total_trajectories == 1

    def test_chain_lookup(self, service):
        assert service.get_chain("human_leg")["dof"] == 6
        assert len(service.get_chains()) == 5
        with pytest.raises(ChainNotFoundError):
            service.get_chain("nope")
