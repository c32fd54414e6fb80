"""
Custom exceptions for the kinematics engine.

The numeric solvers never raise for numeric input; these exceptions cover the
edges of the system (configuration and catalog lookups). All of them inherit
from KinematicsEngineError for easy catching.
"""

from typing import Any


class KinematicsEngineError(Exception):
    """Base exception for all kinematics engine errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - Details: {self.details}"
        return self.message


class ConfigurationError(KinematicsEngineError):
    """Raised when configuration is invalid or missing."""

    pass


class ChainNotFoundError(KinematicsEngineError):
    """Raised when a chain id is not in the registry."""

    def __init__(
        self,
        chain_id: str,
        available: list[str] | None = None,
    ) -> None:
        super().__init__(
            f"Kinematic chain not found: {chain_id}",
            details={"available": available or []},
        )
        self.chain_id = chain_id
