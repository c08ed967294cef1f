"""Structured logging setup using structlog.

Log events go to stderr by default so that ``run --json`` keeps stdout for
the result document.
"""

from __future__ import annotations

import logging
import sys
from contextlib import AbstractContextManager
from typing import TextIO

import structlog


def setup_logging(
    level: str = "INFO",
    json_format: bool = False,
    stream: TextIO | None = None,
) -> None:
    """
    Configure structured logging for step and session events.

    Args:
        level: Minimum level name, e.g. "DEBUG" to see every step start
        json_format: Render one JSON object per event instead of console lines
        stream: Where events are written (defaults to stderr)
    """
    stream = stream or sys.stderr
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {level}")

    logging.basicConfig(format="%(message)s", stream=stream, level=numeric_level)

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if json_format:
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())
    else:
        colors = hasattr(stream, "isatty") and stream.isatty()
        processors.append(structlog.dev.ConsoleRenderer(colors=colors))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=True,
    )


def scenario_context(name: str) -> AbstractContextManager[None]:
    """Tag every event logged inside the block with ``scenario=name``."""
    return structlog.contextvars.bound_contextvars(scenario=name)


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a logger instance."""
    return structlog.get_logger(name)
