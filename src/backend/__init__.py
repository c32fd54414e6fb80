"""
Kinematics Engine Backend Module

HTTP API server exposing the kinematic solvers to web clients.
"""

from .server import run_server

__all__ = ['run_server']
