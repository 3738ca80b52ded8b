"""Logging configuration for the command-line entry point."""

from __future__ import annotations

import logging
import os
import sys

import structlog

LOG_LEVEL_ENV_VAR = "LAZYLS_LOG_LEVEL"


def resolve_level(value: str | int | None, debug: bool) -> int:
    if debug:
        return logging.DEBUG
    if value is None:
        return logging.WARNING
    if isinstance(value, int):
        return value
    try:
        return int(value)
    except (TypeError, ValueError):
        pass
    return logging.getLevelNamesMapping().get(value.upper(), logging.WARNING)


def configure_logging(*, level: str | int | None = None, debug: bool = False) -> None:
    """Send stdlib log records to stderr through structlog's console renderer.

    Stdout is reserved for listing output.
    """
    resolved_level = resolve_level(level or os.environ.get(LOG_LEVEL_ENV_VAR), debug)
    formatter = structlog.stdlib.ProcessorFormatter(
        processor=structlog.dev.ConsoleRenderer(colors=False),
        foreign_pre_chain=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
        ],
    )
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(resolved_level)


__all__ = ["LOG_LEVEL_ENV_VAR", "resolve_level", "configure_logging"]
