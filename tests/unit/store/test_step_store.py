"""Unit tests for the step-versioned store."""

from __future__ import annotations

import pytest
from structlog.testing import capture_logs

from core.errors import LedgerOutOfBoundsError, LedgerStoreError
from core.types import HistoryEntry, ResolvedValue
from store.step_store import StepStore


def _store_at_step(step: int) -> StepStore:
    store = StepStore()
    for _ in range(step):
        store.increment()
    return store


def test_new_store_starts_at_step_zero() -> None:
    """A fresh store should be positioned at step 0 with no entries."""
    store = StepStore()

    assert store.current_step == 0 and store.entry_count == 0


def test_get_returns_value_written_in_current_step() -> None:
    """A write should be readable in the step it was made."""
    store = StepStore()
    store.set("name", "alice")

    assert store.get("name") == "alice" and store.last_step("name") == 0


def test_get_missing_key_returns_none() -> None:
    """Unknown keys should report not found instead of raising."""
    store = StepStore()

    assert store.get("missing") is None and store.last_step("missing") is None


def test_empty_string_is_a_value_not_absence() -> None:
    """An empty value should resolve as a value, unlike a missing key."""
    store = StepStore()
    store.set("note", "")

    assert store.get("note") == "" and "note" in store and "other" not in store


def test_resolve_distinguishes_stored_none() -> None:
    """resolve should expose a stored None together with its step."""
    store = StepStore()
    store.increment()
    store.set("flag", None)

    assert store.resolve("flag") == ResolvedValue(name="flag", step=1, value=None)


def test_set_twice_in_one_step_overwrites() -> None:
    """Repeated writes within a step should keep only the last value."""
    store = StepStore()
    store.set("name", "alice")
    store.set("name", "carol")

    assert store.get("name") == "carol" and store.entry_count == 1


def test_value_stays_visible_after_increment() -> None:
    """Values from closed steps should stay readable in later steps."""
    store = StepStore()
    store.set("name", "alice")
    store.increment()
    store.increment()

    assert store.get("name") == "alice" and store.last_step("name") == 0


def test_later_write_shadows_earlier_step() -> None:
    """A write in a later step should shadow without erasing history."""
    store = StepStore()
    store.set("name", "alice")
    store.increment()
    store.set("name", "bob")

    assert store.get("name") == "bob" and store.history("name") == (
        HistoryEntry(name="name", step=0, value="alice"),
        HistoryEntry(name="name", step=1, value="bob"),
    )


def test_increment_returns_new_step() -> None:
    """increment should report the step it opened."""
    store = StepStore()

    assert store.increment() == 1 and store.increment() == 2


def test_sparse_writes_resolve_nearest_earlier_step() -> None:
    """Keys written on some steps only should resolve to the closest write."""
    store = StepStore()
    store.set("a", "v0")
    store.increment()
    store.increment()
    store.set("a", "v2")
    store.increment()
    store.set("b", "w3")
    store.rollback(1)

    assert store.get("a") == "v0" and store.get("b") is None


def test_rollback_restores_earlier_value() -> None:
    """Rollback should discard later writes and reveal the earlier value."""
    store = StepStore()
    store.set("name", "alice")
    store.increment()
    store.set("name", "bob")

    result = store.rollback(0)

    assert (
        store.current_step == 0
        and store.get("name") == "alice"
        and store.last_step("name") == 0
        and result.purged_entries == 1
        and result.previous_step == 1
    )


def test_rollback_purge_is_permanent() -> None:
    """Rolled-back writes should not come back when stepping forward again."""
    store = StepStore()
    store.increment()
    store.set("draft", "v1")
    store.rollback(0)
    store.increment()

    assert store.get("draft") is None and store.names() == ()


def test_rollback_to_current_step_is_noop() -> None:
    """Rolling back to the current step should keep every entry."""
    store = _store_at_step(2)
    store.set("k", "v")

    result = store.rollback(2)

    assert result.purged_entries == 0 and store.get("k") == "v" and store.current_step == 2


@pytest.mark.parametrize(("target_step", "bound"), [(-1, "low"), (3, "high")])
def test_rollback_out_of_bounds_leaves_store_unchanged(target_step: int, bound: str) -> None:
    """Out-of-range rollbacks should fail before touching any entry."""
    store = _store_at_step(2)
    store.set("k", "v")

    with pytest.raises(LedgerOutOfBoundsError) as error_info:
        store.rollback(target_step)

    assert (
        error_info.value.bound == bound
        and store.current_step == 2
        and store.history("k") == (HistoryEntry(name="k", step=2, value="v"),)
    )


def test_rollback_far_past_current_step_reports_high() -> None:
    """A target well past the current step should be rejected as high."""
    store = _store_at_step(2)

    with pytest.raises(LedgerOutOfBoundsError) as error_info:
        store.rollback(5)

    assert error_info.value.current_step == 2 and store.current_step == 2


@pytest.mark.parametrize("target_step", ["1", 1.0, True])
def test_rollback_rejects_non_integer_target(target_step: object) -> None:
    """Rollback targets must be plain integers."""
    store = _store_at_step(1)

    with pytest.raises(LedgerStoreError):
        store.rollback(target_step)  # type: ignore[arg-type]

    assert store.current_step == 1


def test_increment_then_rollback_has_no_net_effect() -> None:
    """Stepping forward and straight back should leave history intact."""
    store = _store_at_step(1)
    store.set("k", "v")
    before = tuple(store.entries())

    store.increment()
    store.rollback(store.current_step - 1)

    assert store.current_step == 1 and tuple(store.entries()) == before


def test_visible_items_materializes_current_view() -> None:
    """visible_items should map each key to its visible value."""
    store = StepStore()
    store.set("a", "1")
    store.set("b", "2")
    store.increment()
    store.set("a", "3")

    assert store.visible_items() == {"a": "3", "b": "2"}


def test_from_entries_rebuilds_sorted_history() -> None:
    """from_entries should accept unordered entries and resolve normally."""
    entries = [
        HistoryEntry(name="k", step=2, value="late"),
        HistoryEntry(name="k", step=0, value="early"),
    ]

    store = StepStore.from_entries(entries, current_step=3)
    store.rollback(1)

    assert store.get("k") == "early" and store.entry_count == 1


def test_from_entries_rejects_entries_past_current_step() -> None:
    """Entries newer than the step counter should be rejected."""
    entries = [HistoryEntry(name="k", step=4, value="v")]

    with pytest.raises(LedgerStoreError):
        StepStore.from_entries(entries, current_step=3)

    assert True


def test_rollback_logs_purge_summary(debug_logging: None) -> None:
    """Rollback should emit a structured event with purge counts."""
    store = StepStore()
    store.increment()
    store.set("k", "v")

    with capture_logs() as captured:
        store.rollback(0)

    assert {
        "event": "ledger_rolled_back",
        "purged_entries": 1,
        "previous_step": 1,
        "step": 0,
    }.items() <= captured[-1].items()


def test_rejected_rollback_logs_warning(debug_logging: None) -> None:
    """Rejected rollbacks should emit a warning with the violated bound."""
    store = StepStore()

    with capture_logs() as captured:
        with pytest.raises(LedgerOutOfBoundsError):
            store.rollback(-1)

    assert captured[-1]["event"] == "ledger_rollback_rejected" and (
        captured[-1]["log_level"] == "warning" and captured[-1]["bound"] == "low"
    )
