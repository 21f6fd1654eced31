"""Flat-mapping compatibility codec.

This module converts a store to and from a single-level mapping where
each entry is keyed ``"<name>__<step>"`` and the reserved ``"__step__"``
key holds the current step. The store itself never parses these keys.
"""

from __future__ import annotations

from typing import Any, Mapping

from core.constants import INITIAL_STEP, STEP_COUNTER_KEY, STEP_KEY_SEPARATOR
from core.errors import LedgerInvalidStoreError
from core.logging_config import get_logger
from core.types import HistoryEntry
from store.step_store import StepStore

_LOGGER = get_logger(__name__)


def encode_flat_key(name: str, step: int) -> str:
    """Build the flat key for one history entry."""
    return f"{name}{STEP_KEY_SEPARATOR}{step}"


def decode_flat_key(flat_key: str) -> tuple[str, int]:
    """Split a flat key into name and step.

    The step is taken after the last separator, so names that contain
    the separator themselves survive a roundtrip.

    Args:
        flat_key: Encoded ``"<name>__<step>"`` key.

    Returns:
        Pair of name and step.

    Raises:
        LedgerInvalidStoreError: If the key carries no valid step suffix.
    """
    name, separator, suffix = flat_key.rpartition(STEP_KEY_SEPARATOR)
    if not separator or not _is_canonical_step(suffix):
        raise LedgerInvalidStoreError(
            f"Flat key '{flat_key}' has no '{STEP_KEY_SEPARATOR}<step>' suffix. "
            f"Encode entries as '<name>{STEP_KEY_SEPARATOR}<step>'."
        )
    return name, int(suffix)


def to_flat_mapping(store: StepStore) -> dict[str, Any]:
    """Encode a store as a flat mapping.

    Args:
        store: Store to encode.

    Returns:
        Mapping of encoded entry keys plus the step counter key.
    """
    flat: dict[str, Any] = {STEP_COUNTER_KEY: store.current_step}
    for entry in store.entries():
        flat[encode_flat_key(entry.name, entry.step)] = entry.value
    return flat


def from_flat_mapping(mapping: Mapping[str, Any] | None) -> StepStore:
    """Decode a flat mapping into a store.

    A mapping without the step counter key is adopted as-is: every key
    becomes a plain name written at step 0.

    Args:
        mapping: Flat mapping to decode.

    Returns:
        Initialized store.

    Raises:
        LedgerInvalidStoreError: If the mapping is missing, has non-string
            keys, an invalid step counter, or undecodable entry keys.
    """
    if mapping is None:
        raise LedgerInvalidStoreError(
            "Invalid operation: store mapping does not exist. "
            "Create the mapping before handing it to the ledger."
        )
    if not isinstance(mapping, Mapping):
        raise LedgerInvalidStoreError(
            f"Invalid store: expected a mapping, got {type(mapping).__name__}. "
            "Pass a dict of flat keys to values."
        )
    for key in mapping:
        if not isinstance(key, str):
            raise LedgerInvalidStoreError(
                f"Flat mapping key {key!r} is not a string. Use string keys only."
            )
    if STEP_COUNTER_KEY not in mapping:
        adopted = [
            HistoryEntry(name=key, step=INITIAL_STEP, value=value)
            for key, value in mapping.items()
        ]
        store = StepStore.from_entries(adopted, current_step=INITIAL_STEP)
        _LOGGER.info("ledger_store_adopted", adopted_keys=len(mapping))
        return store
    current_step = _parse_step_counter(mapping[STEP_COUNTER_KEY])
    entries = []
    for key, value in mapping.items():
        if key == STEP_COUNTER_KEY:
            continue
        name, step = decode_flat_key(key)
        entries.append(HistoryEntry(name=name, step=step, value=value))
    return StepStore.from_entries(entries, current_step=current_step)


def _parse_step_counter(raw_value: object) -> int:
    if isinstance(raw_value, int) and not isinstance(raw_value, bool) and raw_value >= 0:
        return raw_value
    if isinstance(raw_value, str) and raw_value.isascii() and raw_value.isdigit():
        return int(raw_value)
    raise LedgerInvalidStoreError(
        f"Step counter '{STEP_COUNTER_KEY}' is {raw_value!r}; expected a non-negative integer. "
        "Repair the counter or drop it to adopt the mapping at step 0."
    )


def _is_canonical_step(suffix: str) -> bool:
    # Leading zeros would let "a__01" and "a__1" name the same entry.
    if not (suffix.isascii() and suffix.isdigit()):
        return False
    return suffix == "0" or not suffix.startswith("0")
