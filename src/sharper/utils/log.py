"""Logging configuration.

Library modules obtain structlog loggers with :func:`get_logger` and never
configure output themselves; applications (see ``scripts/sr_report.py``) call
:func:`configure_logging` once at start-up.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

import structlog

__all__ = ["configure_logging", "get_logger"]


def configure_logging(
    level: str = "INFO",
    format_json: bool = False,
    include_timestamp: bool = True,
    extra_processors: Optional[list] = None,
) -> None:
    """Configure structlog on top of the standard library handlers.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ...)
        format_json: Emit JSON lines instead of the console renderer
        include_timestamp: Add an ISO timestamp to every event
        extra_processors: Additional structlog processors
    """
    log_level = getattr(logging, level.upper())

    logging.basicConfig(level=log_level, stream=sys.stderr, format="%(message)s")

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))
    if extra_processors:
        processors.extend(extra_processors)

    if format_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger on top of the stdlib logger ``name``.

    Until :func:`configure_logging` runs, output follows the standard library
    defaults, so debug events from library code stay silent.
    """
    return structlog.wrap_logger(logging.getLogger(name), wrapper_class=structlog.stdlib.BoundLogger)
