"""Stepledger exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Absence of a key is never an error; only invalid operations raise.
"""

from __future__ import annotations


class LedgerError(Exception):
    """Base exception for all stepledger failures."""


class LedgerConfigError(LedgerError):
    """Raised for invalid runtime configuration."""


class LedgerStoreError(LedgerError):
    """Raised for versioned store operation failures."""


class LedgerOutOfBoundsError(LedgerStoreError):
    """Raised when a rollback target lies outside [0, current_step].

    Attributes:
        target_step: Requested rollback step.
        current_step: Store step at the time of the request.
        bound: ``"low"`` when below zero, ``"high"`` when past the current step.
    """

    def __init__(self, target_step: int, current_step: int) -> None:
        self.target_step = target_step
        self.current_step = current_step
        self.bound = "low" if target_step < 0 else "high"
        super().__init__(
            f"Rollback out of bounds ({self.bound}): step {target_step} is outside "
            f"[0, {current_step}]. Choose a step between 0 and the current step."
        )


class LedgerInvalidStoreError(LedgerStoreError):
    """Raised when a store handle or flat mapping is missing or corrupt."""


class LedgerCommandError(LedgerError):
    """Raised for malformed dispatcher commands."""


class LedgerRunSpecError(LedgerError):
    """Raised for invalid or unsupported run-spec configuration."""


class LedgerDependencyError(LedgerError):
    """Raised when an optional runtime dependency is missing."""
