"""
Logging utilities for PyGNSS-Obs.

Uses structlog on top of the standard logging module. Console output
goes to stderr so that exported observations can be piped from stdout.

Usage:
    from pygnss_obs.utils.logging import get_logger, setup_logging

    setup_logging("DEBUG")
    logger = get_logger(__name__)
    logger.info("Parsed RINEX header", version="3.04", obs_types=["C1C"])
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from pygnss_obs.core.config import LoggingConfig

LOG_FILE_NAME = "pygnss_obs.log"


def _build_handlers(
    log_level: int,
    log_dir: Path | str | None,
    log_to_file: bool,
    log_to_console: bool,
) -> list[logging.Handler]:
    handlers: list[logging.Handler] = []

    if log_to_console:
        handlers.append(logging.StreamHandler(sys.stderr))

    if log_to_file and log_dir:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path / LOG_FILE_NAME))

    if not handlers:
        handlers.append(logging.NullHandler())

    for handler in handlers:
        handler.setLevel(log_level)
    return handlers


def _build_processors(json_format: bool) -> list[Any]:
    processors: list[Any] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if json_format:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))
    return processors


def setup_logging(
    level: str = "INFO",
    log_dir: Path | str | None = None,
    log_to_file: bool = False,
    log_to_console: bool = True,
    json_format: bool = False,
) -> None:
    """Configure logging for the application.

    May be called repeatedly; each call replaces the previous handlers.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_dir: Directory for the log file
        log_to_file: Whether to log to ``<log_dir>/pygnss_obs.log``
        log_to_console: Whether to log to stderr
        json_format: Use JSON format for logs
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        handlers=_build_handlers(log_level, log_dir, log_to_file, log_to_console),
        format="%(message)s",
        force=True,
    )

    structlog.configure(
        processors=_build_processors(json_format),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def setup_logging_from_config(
    config: LoggingConfig, level: str | None = None
) -> None:
    """Configure logging from the ``logging`` settings section.

    Args:
        config: Logging settings
        level: Level overriding ``config.level`` (e.g. from --debug)
    """
    setup_logging(
        level=level or config.level,
        log_dir=config.log_dir,
        log_to_file=config.log_to_file,
        log_to_console=config.log_to_console,
        json_format=config.json_format,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured logger instance
    """
    return structlog.get_logger(name)
