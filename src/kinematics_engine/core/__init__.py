"""
Core module - Configuration, logging, exceptions and the chain catalog.
"""

from kinematics_engine.core.chains import (
    CHAINS,
    ChainDescriptor,
    get_chain,
    list_chains,
)
from kinematics_engine.core.config import (
    ConfigManager,
    EngineConfig,
    LoggingConfig,
    ServerConfig,
    load_engine_config,
    resolve_config_dir,
)
from kinematics_engine.core.exceptions import (
    ChainNotFoundError,
    ConfigurationError,
    KinematicsEngineError,
)

__all__ = [
    # Chains
    "CHAINS",
    "ChainDescriptor",
    "get_chain",
    "list_chains",
    # Config
    "ConfigManager",
    "EngineConfig",
    "LoggingConfig",
    "ServerConfig",
    "load_engine_config",
    "resolve_config_dir",
    # Exceptions
    "KinematicsEngineError",
    "ConfigurationError",
    "ChainNotFoundError",
]
