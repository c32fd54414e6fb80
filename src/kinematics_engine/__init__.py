"""
Kinematics Engine - On-demand kinematic computation for articulated chains

Forward and inverse kinematics, trajectory time-parameterization, and motion
intent compression for robot arms and human-limb models.
"""

__version__ = "0.1.0"
__author__ = "Kinematics Engine Contributors"

from kinematics_engine.core.chains import get_chain, list_chains
from kinematics_engine.motion import (
    compress_intent,
    forward_kinematics,
    generate_trajectory,
    solve_ik,
)

__all__ = [
    "__version__",
    "get_chain",
    "list_chains",
    "forward_kinematics",
    "solve_ik",
    "generate_trajectory",
    "compress_intent",
]
