"""Shared typed models.

This module defines immutable result models used by the store,
command dispatcher, and run-spec layers to keep interfaces explicit.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class HistoryEntry:
    """One recorded write in the step history.

    Attributes:
        name: Caller-chosen key.
        step: Step the write landed on.
        value: Opaque stored value.
    """

    name: str
    step: int
    value: Any


@dataclass(frozen=True)
class ResolvedValue:
    """Visible write for a key as of the current step.

    Attributes:
        name: Resolved key.
        step: Step of the most recent write at or before the current step.
        value: Value written at that step.
    """

    name: str
    step: int
    value: Any


@dataclass(frozen=True)
class RollbackResult:
    """Summary of a completed rollback.

    Attributes:
        previous_step: Current step before the rollback.
        current_step: Current step after the rollback.
        purged_entries: Number of history entries discarded.
    """

    previous_step: int
    current_step: int
    purged_entries: int


@dataclass(frozen=True)
class CommandResult:
    """Outcome of one dispatched store command.

    Attributes:
        exit_code: 0 on success, 1 for not-found or rejected operations.
        output: Text to surface to the caller, if any.
    """

    exit_code: int
    output: str | None = None

    @property
    def ok(self) -> bool:
        return self.exit_code == 0
