"""
Structured logging for the kinematics engine.

structlog renders both its own events and stdlib records (uvicorn, fastapi)
through one pipeline. Every line carries the engine's process context
(``service``, ``version``); lines emitted while serving an HTTP request also
carry its ``request_id``, so a solver event can be matched with the
``http_request`` line of the call that produced it.

Usage::

    from kinematics_engine.core.config import LoggingConfig
    from kinematics_engine.core.logging import configure_logging, get_logger

    configure_logging(LoggingConfig(json_output=True))
    logger = get_logger(__name__)
    logger.info("ik_solve_complete", iterations=12, converged=True)
"""

import logging
import sys
import uuid
from contextlib import contextmanager
from typing import Iterator, Optional

import structlog

from kinematics_engine import __version__
from kinematics_engine.core.config import LoggingConfig

SERVICE_NAME = "kinematics-engine"


def _handlers(config: LoggingConfig) -> list[logging.Handler]:
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if config.log_file:
        handlers.append(logging.FileHandler(config.log_file))
    return handlers


def _renderers(json_output: bool) -> list[structlog.types.Processor]:
    # ConsoleRenderer formats exc_info itself
    if json_output:
        return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return [structlog.dev.ConsoleRenderer()]


def configure_logging(config: Optional[LoggingConfig] = None) -> None:
    """
    Configure structured logging for the whole process.

    Replaces any handlers already on the root logger, so calling it again
    (e.g. after reloading configuration) takes full effect.

    Args:
        config: Level, output format and optional log file. Defaults to
            ``LoggingConfig()`` (INFO, console output, stderr only).
    """
    config = config or LoggingConfig()

    timestamper = structlog.processors.TimeStamper(fmt="iso")
    pre_chain: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        timestamper,
    ]

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=pre_chain,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            *_renderers(config.json_output),
        ],
    )
    handlers = _handlers(config)
    for handler in handlers:
        handler.setFormatter(formatter)

    logging.basicConfig(
        level=getattr(logging, config.level.upper(), logging.INFO),
        handlers=handlers,
        force=True,
    )

    structlog.configure(
        processors=[
            *pre_chain,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    structlog.contextvars.bind_contextvars(service=SERVICE_NAME, version=__version__)


@contextmanager
def request_context(request_id: Optional[str] = None) -> Iterator[str]:
    """
    Bind a request id to every log line emitted inside the block.

    Yields:
        The bound id; a fresh hex uuid when none is given.
    """
    request_id = request_id or uuid.uuid4().hex
    with structlog.contextvars.bound_contextvars(request_id=request_id):
        yield request_id


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger for a module, typically ``__name__``."""
    return structlog.get_logger(name)
