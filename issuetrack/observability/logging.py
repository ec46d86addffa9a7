"""Structured logging for issuetrack, built on structlog.

Library code only ever calls :func:`get_logger`.  Applications embedding the
updater call :func:`setup_logging` once at startup; until then structlog's
defaults apply.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, TextIO

import structlog

if TYPE_CHECKING:
    from issuetrack.models.config import LogConfig

_RENDERERS = ("json", "console")


def setup_logging(level: str = "info", renderer: str = "json", file: TextIO | None = None) -> None:
    """Configure structlog to write to *file*, stderr by default.

    ``renderer`` is ``json`` (one object per line, for log shippers) or
    ``console`` (coloured key/value output for local runs).
    """
    if renderer not in _RENDERERS:
        raise ValueError(f"Invalid log renderer: {renderer}. Must be one of {_RENDERERS}")
    log_level = getattr(logging, level.upper(), logging.INFO)
    final = structlog.processors.JSONRenderer() if renderer == "json" else structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso", utc=True, key="ts"),
            final,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=file or sys.stderr),
        cache_logger_on_first_use=False,
    )


def setup_logging_from_config(config: LogConfig, file: TextIO | None = None) -> None:
    setup_logging(config.level, config.renderer, file)


def get_logger(component: str) -> structlog.stdlib.BoundLogger:
    """Get a logger bound with a component name."""
    return structlog.get_logger(component=component)  # type: ignore[return-value]
