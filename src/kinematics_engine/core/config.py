"""
Configuration management for the kinematics engine.

Handles loading and validation of server and logging settings from YAML,
with environment variable overrides applied on top.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from kinematics_engine.core.exceptions import ConfigurationError

CONFIG_FILENAME = "engine.yaml"

# Bind address in host:port form, e.g. "0.0.0.0:8081"
ADDR_ENV_VAR = "KINEMATICS_ADDR"
LOG_LEVEL_ENV_VAR = "KINEMATICS_LOG_LEVEL"
CONFIG_DIR_ENV_VAR = "KINEMATICS_CONFIG_DIR"


class ServerConfig(BaseModel):
    """HTTP server configuration model."""

    host: str = "0.0.0.0"
    port: int = Field(default=8081, ge=1, le=65535)
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])


class LoggingConfig(BaseModel):
    """Logging configuration model."""

    level: str = "INFO"
    json_output: bool = False
    log_file: str | None = None


class EngineConfig(BaseModel):
    """Top-level engine configuration."""

    server: ServerConfig = Field(default_factory=ServerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def parse_addr(addr: str) -> tuple[str, int]:
    """
    Split a ``host:port`` bind address.

    Raises:
        ConfigurationError: If the address has no port or the port is not an integer.
    """
    host, sep, port = addr.rpartition(":")
    if not sep or not host:
        raise ConfigurationError(
            f"Invalid bind address: {addr}",
            details={"expected": "host:port"},
        )
    try:
        return host, int(port)
    except ValueError:
        raise ConfigurationError(
            f"Invalid port in bind address: {addr}",
            details={"port": port},
        )


def apply_env_overrides(
    config: EngineConfig, environ: dict[str, str] | None = None
) -> EngineConfig:
    """Return a copy of ``config`` with environment overrides applied."""
    env = os.environ if environ is None else environ
    data = config.model_dump()

    addr = env.get(ADDR_ENV_VAR)
    if addr:
        host, port = parse_addr(addr)
        data["server"]["host"] = host
        data["server"]["port"] = port

    level = env.get(LOG_LEVEL_ENV_VAR)
    if level:
        data["logging"]["level"] = level

    try:
        return EngineConfig(**data)
    except ValidationError as e:
        raise ConfigurationError(
            "Invalid configuration from environment",
            details={"error": str(e)},
        )


@dataclass
class ConfigManager:
    """
    Configuration manager for the kinematics engine.

    Loads ``engine.yaml`` from a configuration directory. A missing file
    yields the defaults; a missing directory is an error.

    Example:
        >>> config = ConfigManager(config_dir=Path("config"))
        >>> config.get_config().server.port
        8081
    """

    config_dir: Path
    environ: dict[str, str] | None = None
    _config: EngineConfig | None = field(default=None, init=False)

    def __post_init__(self) -> None:
        self.config_dir = Path(self.config_dir)
        if not self.config_dir.exists():
            raise ConfigurationError(
                f"Configuration directory not found: {self.config_dir}"
            )

    @property
    def config_file(self) -> Path:
        return self.config_dir / CONFIG_FILENAME

    def load(self) -> None:
        """Load the engine configuration from disk."""
        data: dict[str, Any] = {}
        if self.config_file.exists():
            try:
                with open(self.config_file) as f:
                    data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigurationError(
                    f"Failed to parse engine config: {self.config_file}",
                    details={"error": str(e)},
                )

        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Engine config must be a mapping: {self.config_file}",
                details={"type": type(data).__name__},
            )

        try:
            config = EngineConfig(
                server=ServerConfig(**(data.get("server") or {})),
                logging=LoggingConfig(**(data.get("logging") or {})),
            )
        except ValidationError as e:
            raise ConfigurationError(
                f"Failed to load engine config: {self.config_file}",
                details={"error": str(e)},
            )

        self._config = apply_env_overrides(config, self.environ)

    def get_config(self) -> EngineConfig:
        """Get the engine configuration, loading it on first access."""
        if self._config is None:
            self.load()
        return self._config

    def get_server(self) -> ServerConfig:
        return self.get_config().server

    def get_logging(self) -> LoggingConfig:
        return self.get_config().logging


def load_engine_config(
    config_dir: Path | str | None = None,
    environ: dict[str, str] | None = None,
) -> EngineConfig:
    """
    Load the engine configuration.

    Args:
        config_dir: Directory holding ``engine.yaml``. If None, defaults are used.
        environ: Environment mapping for overrides (defaults to ``os.environ``).

    Returns:
        EngineConfig with environment overrides applied.
    """
    if config_dir is None:
        return apply_env_overrides(EngineConfig(), environ)
    return ConfigManager(config_dir=Path(config_dir), environ=environ).get_config()


def resolve_config_dir(
    default_dir: Path, environ: dict[str, str] | None = None
) -> Path | None:
    """
    Pick the configuration directory for a process.

    An explicit ``KINEMATICS_CONFIG_DIR`` is returned as-is, so a missing
    directory surfaces as a ``ConfigurationError`` when it is loaded.
    Otherwise ``default_dir`` is used if it exists, else None (defaults).
    """
    env = os.environ if environ is None else environ
    explicit = env.get(CONFIG_DIR_ENV_VAR)
    if explicit:
        return Path(explicit)
    return default_dir if default_dir.exists() else None
