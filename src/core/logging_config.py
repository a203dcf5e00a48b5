"""Structured logging configuration.

This module initializes structlog loggers with a stable JSON format
so store events carry their fields as machine-readable keys.
Log lines go to stderr; stdout stays reserved for CLI results.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

_CONFIGURED = False


def get_logger(name: str) -> Any:
    """Return a module logger instance.

    Args:
        name: Logger name, usually __name__.

    Returns:
        A structlog bound logger with structured output.
    """
    _configure_structlog()
    return structlog.get_logger(name)


def _configure_structlog() -> None:
    """Apply the process-wide structlog configuration once."""
    global _CONFIGURED
    if _CONFIGURED:
        return
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.JSONRenderer(sort_keys=True),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.INFO),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )
    _CONFIGURED = True
