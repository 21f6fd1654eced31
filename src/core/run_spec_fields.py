"""Type-safe field parsing helpers for run-spec execution.

This module centralizes primitive parsing so run-spec executors can stay
concise and produce consistent validation errors.
"""

from __future__ import annotations

from typing import Any, Mapping

from core.errors import LedgerRunSpecError

_SCALAR_TYPES = (str, int, float, bool)


def required_key(args: Mapping[str, object], field_name: str = "key") -> str:
    """Read a store key from a run-spec step.

    Keys are used verbatim; the empty string is a valid key.
    """
    value = args.get(field_name)
    if isinstance(value, str):
        return value
    if value is None:
        raise LedgerRunSpecError(f"Run-spec step is missing required field '{field_name}'.")
    raise LedgerRunSpecError(f"Run-spec field '{field_name}' must be a string.")


def optional_string(args: Mapping[str, object], field_name: str) -> str | None:
    """Read an optional string field; a blank value is an error, not absence."""
    value = args.get(field_name)
    if value is None:
        return None
    if isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            raise LedgerRunSpecError(f"Run-spec field '{field_name}' must not be blank.")
        return stripped
    raise LedgerRunSpecError(f"Run-spec field '{field_name}' must be a string when provided.")


def required_int(args: Mapping[str, object], field_name: str) -> int:
    """Read a required integer field from a run-spec step."""
    value = args.get(field_name)
    if value is None:
        raise LedgerRunSpecError(f"Run-spec step is missing required field '{field_name}'.")
    if isinstance(value, bool) or not isinstance(value, int):
        raise LedgerRunSpecError(f"Run-spec field '{field_name}' must be an integer.")
    return value


def required_scalar(args: Mapping[str, object], field_name: str) -> Any:
    """Read a required scalar value; an explicit null is allowed."""
    if field_name not in args:
        raise LedgerRunSpecError(f"Run-spec step is missing required field '{field_name}'.")
    value = args[field_name]
    if value is None or isinstance(value, _SCALAR_TYPES):
        return value
    raise LedgerRunSpecError(
        f"Run-spec field '{field_name}' must be a scalar (string, number, boolean, or null)."
    )
