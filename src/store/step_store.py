"""Step-versioned in-memory key-value store.

This module owns the step history table and the read-resolution rule:
a key resolves to its most recent write at or before the current step.
Closed steps are immutable; rollback discards every later write.
"""

from __future__ import annotations

import bisect
from typing import Any, Iterable, Iterator

from core.constants import INITIAL_STEP
from core.errors import LedgerInvalidStoreError, LedgerOutOfBoundsError, LedgerStoreError
from core.logging_config import get_logger
from core.types import HistoryEntry, ResolvedValue, RollbackResult

_LOGGER = get_logger(__name__)


class StepStore:
    """Versioned store with linear, monotonically numbered steps.

    Writes always land on the current step. Each key keeps a sorted list
    of the steps it was written on, so reads bisect instead of scanning
    every step back to zero.

    Not thread-safe: callers sharing a store across threads must hold
    their own lock around every operation.
    """

    def __init__(self) -> None:
        """Create an empty store positioned at step 0."""
        self._current_step = INITIAL_STEP
        self._values: dict[str, dict[int, Any]] = {}
        self._steps: dict[str, list[int]] = {}

    @classmethod
    def from_entries(cls, entries: Iterable[HistoryEntry], current_step: int) -> "StepStore":
        """Rebuild a store from recorded history.

        Args:
            entries: History entries in any order.
            current_step: Step the rebuilt store is positioned at.

        Returns:
            Store holding exactly the given entries.

        Raises:
            LedgerInvalidStoreError: If a step is negative, not an integer,
                or newer than ``current_step``.
        """
        if not _is_step_number(current_step) or current_step < 0:
            raise LedgerInvalidStoreError(
                f"Invalid current step {current_step!r}: expected a non-negative integer. "
                "Rebuild the store from a valid step counter."
            )
        store = cls()
        store._current_step = current_step
        for entry in entries:
            if not _is_step_number(entry.step) or not 0 <= entry.step <= current_step:
                raise LedgerInvalidStoreError(
                    f"History entry '{entry.name}' has step {entry.step!r} outside "
                    f"[0, {current_step}]. Drop entries newer than the step counter."
                )
            values = store._values.setdefault(entry.name, {})
            if entry.step not in values:
                bisect.insort(store._steps.setdefault(entry.name, []), entry.step)
            values[entry.step] = entry.value
        return store

    @property
    def current_step(self) -> int:
        """Step that new writes land on."""
        return self._current_step

    @property
    def entry_count(self) -> int:
        """Number of recorded (key, step) entries."""
        return sum(len(steps) for steps in self._steps.values())

    def set(self, key: str, value: Any) -> None:
        """Write a value at the current step.

        A second write to the same key within one step replaces the first.

        Args:
            key: Caller-chosen key.
            value: Opaque value to record.
        """
        steps = self._steps.setdefault(key, [])
        if not steps or steps[-1] != self._current_step:
            steps.append(self._current_step)
        self._values.setdefault(key, {})[self._current_step] = value
        _LOGGER.debug("ledger_value_set", key=key, step=self._current_step)

    def resolve(self, key: str) -> ResolvedValue | None:
        """Resolve the visible write for a key.

        Args:
            key: Key to resolve.

        Returns:
            Most recent write at or before the current step, or None when
            the key has no visible write.
        """
        steps = self._steps.get(key)
        if not steps:
            return None
        index = bisect.bisect_right(steps, self._current_step)
        if index == 0:
            return None
        step = steps[index - 1]
        return ResolvedValue(name=key, step=step, value=self._values[key][step])

    def get(self, key: str) -> Any:
        """Return the visible value for a key, or None when not found.

        Use ``resolve`` when a stored None must be told apart from absence.
        """
        resolved = self.resolve(key)
        return None if resolved is None else resolved.value

    def last_step(self, key: str) -> int | None:
        """Return the step of the visible write for a key, or None."""
        resolved = self.resolve(key)
        return None if resolved is None else resolved.step

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.resolve(key) is not None

    def increment(self) -> int:
        """Close the current step and open the next one.

        Returns:
            The new current step.
        """
        self._current_step += 1
        _LOGGER.info("ledger_step_incremented", step=self._current_step)
        return self._current_step

    def rollback(self, target_step: int) -> RollbackResult:
        """Discard every write after a step and move back to it.

        Bounds are checked before anything is deleted, so a rejected
        rollback leaves the store untouched. Discarded writes are gone
        for good; advancing again does not bring them back.

        Args:
            target_step: Step to return to, in [0, current_step].

        Returns:
            Summary of the rollback.

        Raises:
            LedgerStoreError: If the target is not an integer.
            LedgerOutOfBoundsError: If the target is below 0 or past the
                current step.
        """
        if not _is_step_number(target_step):
            raise LedgerStoreError(
                f"Rollback target must be an integer step, got {target_step!r}. "
                "Pass a step number between 0 and the current step."
            )
        if target_step < 0 or target_step > self._current_step:
            error = LedgerOutOfBoundsError(target_step, self._current_step)
            _LOGGER.warning(
                "ledger_rollback_rejected",
                target_step=target_step,
                current_step=self._current_step,
                bound=error.bound,
            )
            raise error
        previous_step = self._current_step
        purged_entries = self._purge_after(target_step)
        self._current_step = target_step
        _LOGGER.info(
            "ledger_rolled_back",
            previous_step=previous_step,
            step=target_step,
            purged_entries=purged_entries,
        )
        return RollbackResult(
            previous_step=previous_step,
            current_step=target_step,
            purged_entries=purged_entries,
        )

    def history(self, key: str) -> tuple[HistoryEntry, ...]:
        """Return every recorded write for a key, oldest first."""
        values = self._values.get(key, {})
        return tuple(
            HistoryEntry(name=key, step=step, value=values[step])
            for step in self._steps.get(key, [])
        )

    def names(self) -> tuple[str, ...]:
        """Return keys with at least one recorded write, sorted."""
        return tuple(sorted(self._steps))

    def entries(self) -> Iterator[HistoryEntry]:
        """Iterate over all history entries ordered by key then step."""
        for key in self.names():
            yield from self.history(key)

    def visible_items(self) -> dict[str, Any]:
        """Materialize the visible value of every key."""
        items: dict[str, Any] = {}
        for key in self.names():
            resolved = self.resolve(key)
            if resolved is not None:
                items[key] = resolved.value
        return items

    def __repr__(self) -> str:
        return (
            f"StepStore(current_step={self._current_step}, "
            f"keys={len(self._steps)}, entries={self.entry_count})"
        )

    def _purge_after(self, target_step: int) -> int:
        purged = 0
        for key in list(self._steps):
            steps = self._steps[key]
            keep = bisect.bisect_right(steps, target_step)
            if keep == len(steps):
                continue
            values = self._values[key]
            for step in steps[keep:]:
                del values[step]
            purged += len(steps) - keep
            if keep == 0:
                del self._steps[key]
                del self._values[key]
            else:
                del steps[keep:]
        return purged


def _is_step_number(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
