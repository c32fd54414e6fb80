"""
Demonstration of the kinematics engine solvers.

This script shows how to:
1. Browse the chain catalog
2. Evaluate forward kinematics
3. Solve inverse kinematics and check the pose with FK
4. Time-parameterize a waypoint path
5. Classify a motion sample sequence
"""

from kinematics_engine import (
    compress_intent,
    forward_kinematics,
    generate_trajectory,
    list_chains,
    solve_ik,
)
from kinematics_engine.motion import (
    FkProblem,
    IkProblem,
    MotionSample,
    TrajectoryProblem,
)


def main():
    """Run kinematics demonstration."""
    print("=" * 60)
    print("Kinematics Engine Demo")
    print("=" * 60)

    # 1. Chain catalog
    print("\n1. Chain catalog")
    for chain in list_chains():
        print(f"   [OK] {chain.id:<14} {chain.dof} DOF  {chain.name}")

    # 2. Forward kinematics
    print("\n2. Forward kinematics")
    fk = forward_kinematics(FkProblem(joint_angles=[0.3, -0.2, 0.4], link_lengths=[0.5, 0.4, 0.3]))
    x, y, z = fk.end_effector_position
    print(f"   [OK] End effector at ({x:.4f}, {y:.4f}, {z:.4f})")
    print(f"   [OK] {len(fk.joint_positions)} joint positions, {fk.elapsed_us} us")

    # 3. Inverse kinematics
    print("\n3. Inverse kinematics")
    solution = solve_ik(IkProblem(target_position=(0.6, 0.3, 0.1), joint_count=4))
    status = "converged" if solution.converged else "not converged"
    print(f"   [OK] {status} after {solution.iterations} iterations")
    print(f"   [OK] Residual error: {solution.error_distance:.4e}")

    check = forward_kinematics(FkProblem(
        joint_angles=solution.joint_angles,
        link_lengths=[1.0 / 4] * 4,
    ))
    x, y, z = check.end_effector_position
    print(f"   [OK] FK of solution: ({x:.4f}, {y:.4f}, {z:.4f})")

    # 4. Trajectory
    print("\n4. Trajectory")
    trajectory = generate_trajectory(TrajectoryProblem(
        waypoints=[[0.0, 0.0, 0.0], [1.0, 0.0, 0.0], [1.0, 1.0, 0.0], [1.0, 1.0, 0.0]],
        max_velocity=0.5,
    ))
    for point in trajectory.points:
        print(f"   t={point.time:7.3f}  position={point.position}")
    print(f"   [OK] {trajectory.total_distance:.2f} m in {trajectory.total_time:.2f} s")

    # 5. Motion intent
    print("\n5. Motion intent")
    samples = [
        MotionSample(timestamp_ms=i * 10, position=(i * 0.1, 0.0, 0.0), velocity=(1.0, 0.0, 0.0))
        for i in range(11)
    ]
    intent = compress_intent(samples)
    print(f"   [OK] {intent.intent_type.value}: magnitude {intent.magnitude:.2f}, "
          f"{intent.original_samples} samples -> {intent.compressed_bytes} bytes")

    print("\n" + "=" * 60)
    print("Demo complete")
    print("=" * 60)


if __name__ == "__main__":
    main()
