"""Structured logging setup using structlog."""

from __future__ import annotations

import logging
import sys

import structlog

from loose_dates.config import Settings


def setup_logging(log_level: str | None = None, *, json: bool | None = None, settings: Settings | None = None):
    """Configure structlog output for an application embedding the parser.

    Arguments left as ``None`` fall back to ``Settings`` (``LOOSE_DATES_LOG_LEVEL``
    and ``LOOSE_DATES_LOG_JSON``). JSON lines go to stdout; with ``json=False``
    the human-readable console renderer is used instead.
    """
    settings = settings or Settings()
    level = (log_level or settings.log_level).upper()
    renderer = (
        structlog.processors.JSONRenderer()
        if (settings.log_json if json is None else json)
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, level)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """Return a bound logger for the given component *name*."""
    return structlog.get_logger(name)
