"""Structured logging setup based on structlog."""
from __future__ import annotations

import logging
import sys

import structlog

from .config import settings


def setup_logging(level: str | None = None, fmt: str | None = None) -> None:
    """Configure structlog for the CLI and library use.

    ``console`` renders coloured text for interactive sessions, ``json``
    emits one object per line.
    """
    level_name = (level or settings.log_level).upper()
    log_level = logging.getLevelName(level_name)
    if not isinstance(log_level, int):
        log_level = logging.WARNING

    processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if (fmt or settings.log_format) == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )

    # httpx / googleapiclient log through the standard library
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=log_level)


__all__ = ["setup_logging"]
