"""Public SDK surface for stepledger.

This module provides a stable import path for library users.
It re-exports the store, its codecs, and typed result models.
"""

from __future__ import annotations

from core.config import LedgerConfig
from core.errors import (
    LedgerCommandError,
    LedgerError,
    LedgerInvalidStoreError,
    LedgerOutOfBoundsError,
    LedgerStoreError,
)
from core.logging_config import configure_logging
from core.run_spec_execution import execute_run_spec, execute_run_spec_file
from core.types import CommandResult, HistoryEntry, ResolvedValue, RollbackResult
from store.flat_mapping import from_flat_mapping, to_flat_mapping
from store.ledger_commands import execute_command
from store.step_store import StepStore

__all__ = [
    "CommandResult",
    "HistoryEntry",
    "LedgerCommandError",
    "LedgerConfig",
    "LedgerError",
    "LedgerInvalidStoreError",
    "LedgerOutOfBoundsError",
    "LedgerStoreError",
    "ResolvedValue",
    "RollbackResult",
    "StepStore",
    "configure_logging",
    "execute_command",
    "execute_run_spec",
    "execute_run_spec_file",
    "from_flat_mapping",
    "to_flat_mapping",
]
