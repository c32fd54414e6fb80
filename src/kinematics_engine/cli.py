"""
Command-line interface for the kinematics engine.

Provides commands for running the HTTP server, browsing the chain catalog,
and running one-off solves from the terminal.
"""

import json
import os
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from kinematics_engine import __version__
from kinematics_engine.core.chains import list_chains
from kinematics_engine.core.config import CONFIG_DIR_ENV_VAR, load_engine_config
from kinematics_engine.core.exceptions import KinematicsEngineError
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

console = Console()

# Allow negative numbers as positional arguments
NUMERIC_ARGS = {"ignore_unknown_options": True}


def _fmt(values) -> str:
    return "(" + ", ".join(f"{v:.6f}" for v in values) + ")"


def _parse_waypoint(ctx: click.Context, param: click.Parameter, value) -> list[list[float]]:
    waypoints = []
    for raw in value:
        try:
            waypoints.append([float(part) for part in raw.split(",") if part.strip()])
        except ValueError:
            raise click.BadParameter(f"expected comma-separated numbers, got '{raw}'")
    return waypoints


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--config-dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Configuration directory holding engine.yaml",
)
@click.pass_context
def main(ctx: click.Context, config_dir: Optional[Path]) -> None:
    """Kinematics Engine - kinematic computation for articulated chains."""
    ctx.ensure_object(dict)
    ctx.obj["config_dir"] = config_dir


# =============================================================================
# Server
# =============================================================================


def start_server(
    host: Optional[str] = None,
    port: Optional[int] = None,
    config_dir: Optional[Path] = None,
) -> None:
    """
    Start the HTTP API server.

    Used by ``kinematics-engine serve`` and ``scripts/start_backend.py``.
    The backend loads its configuration and configures logging on import.
    """
    if config_dir is not None:
        os.environ[CONFIG_DIR_ENV_VAR] = str(config_dir)

    try:
        from backend.server import run_server
    except KinematicsEngineError as e:
        console.print(f"[red]✗[/red] Failed to start server: {e}")
        raise SystemExit(1)

    run_server(host=host, port=port)


@main.command()
@click.option("--host", default=None, help="Host to bind to (default from config)")
@click.option("--port", type=int, default=None, help="Port to bind to (default from config)")
@click.pass_context
def serve(ctx: click.Context, host: Optional[str], port: Optional[int]) -> None:
    """Run the HTTP API server."""
    start_server(host=host, port=port, config_dir=ctx.obj["config_dir"])


# =============================================================================
# Catalog
# =============================================================================


@main.command()
def chains() -> None:
    """List the kinematic chain presets."""
    table = Table(title="Kinematic Chains")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("DOF", justify="right")
    table.add_column("Joint Type")
    table.add_column("Description")

    for chain in list_chains():
        table.add_row(chain.id, chain.name, str(chain.dof), chain.joint_type, chain.description)

    console.print(table)


# =============================================================================
# Solves
# =============================================================================


@main.command(context_settings=NUMERIC_ARGS)
@click.argument("angles", nargs=-1, type=float)
@click.option(
    "--link-length", "-l", "link_lengths", multiple=True, type=float,
    help="Link length per joint (repeatable)",
)
def fk(angles: tuple[float, ...], link_lengths: tuple[float, ...]) -> None:
    """Evaluate forward kinematics for joint ANGLES (radians)."""
    result = forward_kinematics(
        FkProblem(joint_angles=list(angles), link_lengths=list(link_lengths) or None)
    )

    table = Table(title="Joint Positions")
    table.add_column("Joint", justify="right")
    table.add_column("Position")
    for i, position in enumerate(result.joint_positions):
        table.add_row(str(i), _fmt(position))

    console.print(table)
    console.print(f"End effector:  {_fmt(result.end_effector_position)}")
    console.print(f"Orientation:   {_fmt(result.end_effector_orientation)}")
    console.print(f"Elapsed:       {result.elapsed_us} µs")


@main.command(context_settings=NUMERIC_ARGS)
@click.argument("x", type=float)
@click.argument("y", type=float)
@click.argument("z", type=float)
@click.option("--joints", "-n", type=click.IntRange(min=0), default=7, help="Joint count")
@click.option("--max-iterations", type=click.IntRange(min=0), default=100, help="Iteration budget")
@click.option("--tolerance", type=float, default=1e-6, help="Convergence tolerance")
def ik(x: float, y: float, z: float, joints: int, max_iterations: int, tolerance: float) -> None:
    """Solve inverse kinematics for target position X Y Z."""
    solution = solve_ik(IkProblem(
        target_position=(x, y, z),
        joint_count=joints,
        max_iterations=max_iterations,
        tolerance=tolerance,
    ))

    status = "[green]✓ converged[/green]" if solution.converged else "[yellow]⚠ not converged[/yellow]"
    console.print(f"{status} after {solution.iterations} iterations")
    console.print(f"  Error:   {solution.error_distance:.3e}")
    console.print(f"  Angles:  {_fmt(solution.joint_angles)}")
    console.print(f"  Elapsed: {solution.elapsed_us} µs")


@main.command()
@click.option(
    "--waypoint", "-w", "waypoints", multiple=True, callback=_parse_waypoint,
    help="Waypoint as x,y,z (repeatable, in path order)",
)
@click.option("--max-velocity", type=float, default=1.0, help="Velocity cap")
def trajectory(waypoints: list[list[float]], max_velocity: float) -> None:
    """Time-parameterize a waypoint path."""
    result = generate_trajectory(TrajectoryProblem(waypoints=waypoints, max_velocity=max_velocity))

    table = Table(title="Trajectory")
    table.add_column("#", justify="right")
    table.add_column("Position")
    table.add_column("Velocity")
    table.add_column("Time", justify="right")
    for i, point in enumerate(result.points):
        table.add_row(str(i), _fmt(point.position), _fmt(point.velocity), f"{point.time:.4f}")

    console.print(table)
    console.print(f"Total distance: {result.total_distance:.4f}")
    console.print(f"Total time:     {result.total_time:.4f}")
    console.print(f"Peak speed:     {result.max_velocity_reached:.4f}")


@main.command()
@click.argument("samples_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def intent(samples_file: Path) -> None:
    """Classify the motion samples in SAMPLES_FILE (JSON list)."""
    try:
        raw = json.loads(samples_file.read_text())
        samples = [
            MotionSample(
                timestamp_ms=s.get("timestamp_ms", 0),
                position=tuple(s["position"]),
                velocity=tuple(s["velocity"]) if s.get("velocity") is not None else None,
            )
            for s in raw
        ]
        if any(len(s.position) != 3 for s in samples):
            raise ValueError("every position needs exactly 3 components")
    except (ValueError, KeyError, TypeError, AttributeError) as e:
        console.print(f"[red]✗[/red] Invalid samples file: {e}")
        raise SystemExit(1)

    result = compress_intent(samples)
    console.print(f"Intent:      [cyan]{result.intent_type.value}[/cyan]")
    console.print(f"Direction:   {_fmt(result.direction)}")
    console.print(f"Magnitude:   {result.magnitude:.6f}")
    console.print(f"Compression: {result.original_samples} samples -> "
                  f"{result.compressed_bytes} bytes (ratio {result.compression_ratio:.1f})")


# =============================================================================
# Configuration
# =============================================================================


@main.command("show-config")
@click.pass_context
def show_config(ctx: click.Context) -> None:
    """Show the effective engine configuration."""
    try:
        config = load_engine_config(ctx.obj["config_dir"])
    except KinematicsEngineError as e:
        console.print(f"[red]✗[/red] Failed to load configuration: {e}")
        raise SystemExit(1)

    table = Table(title="Engine Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    table.add_row("server.host", config.server.host)
    table.add_row("server.port", str(config.server.port))
    table.add_row("server.cors_origins", ", ".join(config.server.cors_origins))
    table.add_row("logging.level", config.logging.level)
    table.add_row("logging.json_output", str(config.logging.json_output))
    table.add_row("logging.log_file", config.logging.log_file or "(none)")

    console.print(table)


if __name__ == "__main__":
    main()
