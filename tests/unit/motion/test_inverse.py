"""
Unit tests for the iterative IK solver.
"""

import math
import sys

import numpy as np
import pytest

from kinematics_engine.motion.inverse import (
    ANGLE_LIMIT,
    DAMPING,
    ik_step,
    joint_phases,
    solve_ik,
)
from kinematics_engine.motion.types import IkProblem


@pytest.mark.unit
class TestIkStep:
    def test_phases(self):
        assert joint_phases(4).tolist() == pytest.approx([0.25, 0.5, 0.75, 1.0])
        assert joint_phases(0).size == 0

    def test_x_error_projects_on_cosine(self):
        updated = ik_step(np.zeros(2), np.array([1.0, 0.0, 0.0]))
        assert updated.tolist() == pytest.approx([DAMPING * math.cos(0.5), DAMPING * math.cos(1.0)])

    def test_y_error_projects_on_sine(self):
        updated = ik_step(np.zeros(2), np.array([0.0, 1.0, 0.0]))
        assert updated.tolist() == pytest.approx([DAMPING * math.sin(0.5), DAMPING * math.sin(1.0)])

    def test_z_error_is_uniform(self):
        updated = ik_step(np.zeros(3), np.array([0.0, 0.0, 1.0]))
        assert updated.tolist() == pytest.approx([0.05, 0.05, 0.05])

    def test_clamped_to_pi(self):
        updated = ik_step(np.array([3.1]), np.array([10.0, 0.0, 0.0]))
        assert updated[0] == ANGLE_LIMIT

        updated = ik_step(np.array([-3.1]), np.array([-10.0, 0.0, 0.0]))
        assert updated[0] == -ANGLE_LIMIT

    def test_does_not_mutate_input(self):
        angles = np.zeros(3)
        ik_step(angles, np.array([1.0, 1.0, 1.0]))
        assert angles.tolist() == [0.0, 0.0, 0.0]


@pytest.mark.unit
class TestSolveIk:
    def test_defaults(self):
        problem = IkProblem(target_position=(0.5, 0.5, 0.0))
        assert problem.joint_count == 7
        assert problem.max_iterations == 100
        assert problem.tolerance == 1e-6

    def test_straight_chain_target_converges_immediately(self):
        # Zero angles with link length 1/n put the end effector at (1, 0, 0)
        solution = solve_ik(IkProblem(target_position=(1.0, 0.0, 0.0)))
        assert solution.converged is True
        assert solution.iterations == 1
        assert solution.joint_angles == [0.0] * 7
        assert solution.error_distance < 1e-6

    def test_empty_chain_at_origin_converges_immediately(self):
        solution = solve_ik(IkProblem(target_position=(0.0, 0.0, 0.0), joint_count=0))
        assert solution.converged is True
        assert solution.iterations == 1
        assert solution.joint_angles == []
        assert solution.error_distance == 0.0

    def test_single_iteration_update(self):
        solution = solve_ik(IkProblem(
            target_position=(0.0, 0.0, 0.0), joint_count=1, max_iterations=1,
        ))
        assert solution.iterations == 1
        assert solution.converged is False
        assert solution.error_distance == pytest.approx(1.0)
        assert solution.joint_angles == pytest.approx([-DAMPING * math.cos(1.0)])

    def test_unreachable_target_exhausts_budget(self):
        solution = solve_ik(IkProblem(target_position=(5.0, 5.0, 5.0), max_iterations=50))
        assert solution.iterations == 50
        assert solution.converged is False
        assert solution.error_distance > 1.0

    def test_angles_stay_within_limits(self):
        solution = solve_ik(IkProblem(target_position=(-50.0, 30.0, 20.0)))
        assert all(-math.pi <= a <= math.pi for a in solution.joint_angles)

    def test_zero_budget_reports_sentinel(self):
        solution = solve_ik(IkProblem(target_position=(0.2, 0.1, 0.0), max_iterations=0))
        assert solution.iterations == 0
        assert solution.converged is False
        assert solution.error_distance == sys.float_info.max
        assert solution.joint_angles == [0.0] * 7

    @pytest.mark.parametrize("target", [
        (1.0, 0.0, 0.0),
        (0.5, 0.5, 0.1),
        (0.0, 0.8, 0.0),
        (-0.3, 0.2, 0.4),
        (3.0, 0.0, 0.0),
    ])
    def test_converged_implies_error_below_tolerance(self, target):
        tolerance = 1e-3
        solution = solve_ik(IkProblem(target_position=target, max_iterations=200, tolerance=tolerance))
        assert solution.iterations <= 200
        assert solution.converged == (solution.error_distance < tolerance)

    def test_orientation_is_ignored(self):
        plain = solve_ik(IkProblem(target_position=(0.4, 0.3, 0.1)))
        oriented = solve_ik(IkProblem(
            target_position=(0.4, 0.3, 0.1), target_orientation=(0.0, 0.0, 0.7071, 0.7071),
        ))
        assert plain.joint_angles == oriented.joint_angles
        assert plain.iterations == oriented.iterations
        assert plain.error_distance == oriented.error_distance

    def test_injected_id_factory(self, id_factory):
        first = solve_ik(IkProblem(target_position=(1.0, 0.0, 0.0)), id_factory=id_factory)
        second = solve_ik(IkProblem(target_position=(1.0, 0.0, 0.0)), id_factory=id_factory)
        assert first.solution_id == "id-1"
        assert second.solution_id == "id-2"

    def test_default_ids_are_unique(self):
        ids = {solve_ik(IkProblem(target_position=(1.0, 0.0, 0.0))).solution_id for _ in range(20)}
        assert len(ids) == 20
