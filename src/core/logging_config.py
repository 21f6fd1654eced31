"""Structured logging configuration.

This module initializes structlog with a stable structured format.
Log lines go to stderr so command output on stdout stays parseable.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from core.config import LedgerConfig

_CONFIGURED = False


def configure_logging(config: LedgerConfig) -> None:
    """Apply level and renderer settings from runtime config.

    Args:
        config: Validated runtime configuration.
    """
    global _CONFIGURED
    renderer: Any
    if config.log_format == "console":
        renderer = structlog.dev.ConsoleRenderer(colors=False)
    else:
        renderer = structlog.processors.JSONRenderer(sort_keys=True)
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(config.log_level)
        ),
        logger_factory=_stderr_logger,
        cache_logger_on_first_use=False,
    )
    _CONFIGURED = True


def get_logger(name: str) -> Any:
    """Return a module logger instance.

    Args:
        name: Logger name, usually __name__.

    Returns:
        A structlog logger bound to the module name.
    """
    if not _CONFIGURED:
        configure_logging(LedgerConfig())
    return structlog.get_logger(logger_name=name)


def _stderr_logger(*args: Any) -> Any:
    """Build a print logger bound to the current stderr stream."""
    return structlog.PrintLogger(file=sys.stderr)
