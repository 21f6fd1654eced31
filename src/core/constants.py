"""Core constants used across stepledger modules.

This module centralizes reserved keys, defaults, and supported options.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

INITIAL_STEP = 0
STEP_COUNTER_KEY = "__step__"
STEP_KEY_SEPARATOR = "__"
DEFAULT_LOG_LEVEL = "WARNING"
SUPPORTED_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
DEFAULT_LOG_FORMAT = "json"
SUPPORTED_LOG_FORMATS = ("json", "console")
RUN_SPEC_VERSION = 1
MISSING_VALUE_MARKER = "<missing>"
UNKNOWN_COMMAND_MESSAGE = "unknown command"
SHELL_COMMENT_PREFIX = "#"
