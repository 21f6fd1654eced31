"""Runtime configuration model for stepledger.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os

from core.constants import (
    DEFAULT_LOG_FORMAT,
    DEFAULT_LOG_LEVEL,
    SUPPORTED_LOG_FORMATS,
    SUPPORTED_LOG_LEVELS,
)
from core.errors import LedgerConfigError


@dataclass(frozen=True)
class LedgerConfig:
    """Validated runtime configuration.

    Attributes:
        log_level: Minimum structured log level emitted.
        log_format: ``json`` for machine-readable lines, ``console`` for humans.
    """

    log_level: str = DEFAULT_LOG_LEVEL
    log_format: str = DEFAULT_LOG_FORMAT

    @classmethod
    def from_env(cls) -> "LedgerConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            LedgerConfigError: If environment values are invalid.
        """
        log_level = parse_log_level(os.getenv("STEPLEDGER_LOG_LEVEL", DEFAULT_LOG_LEVEL))
        log_format = _parse_log_format(os.getenv("STEPLEDGER_LOG_FORMAT", DEFAULT_LOG_FORMAT))
        return cls(log_level=log_level, log_format=log_format)


def parse_log_level(raw_value: str) -> str:
    """Normalize and validate a log level name.

    Args:
        raw_value: Raw level string, case-insensitive.

    Returns:
        Upper-case level name.

    Raises:
        LedgerConfigError: If the level is not supported.
    """
    level = raw_value.strip().upper()
    if level in SUPPORTED_LOG_LEVELS:
        return level
    raise LedgerConfigError(
        f"Invalid STEPLEDGER_LOG_LEVEL value '{raw_value}'. "
        f"Use one of: {', '.join(SUPPORTED_LOG_LEVELS)}."
    )


def _parse_log_format(raw_value: str) -> str:
    log_format = raw_value.strip().lower()
    if log_format in SUPPORTED_LOG_FORMATS:
        return log_format
    raise LedgerConfigError(
        f"Invalid STEPLEDGER_LOG_FORMAT value '{raw_value}'. "
        f"Use one of: {', '.join(SUPPORTED_LOG_FORMATS)}."
    )
