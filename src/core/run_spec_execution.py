"""Shared run-spec execution engine for CLI and SDK workflows.

This module maps validated run-spec steps to store operations so different
entry points can execute one declarative workflow without drift.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import MutableMapping

from core.constants import MISSING_VALUE_MARKER
from core.errors import LedgerRunSpecError
from core.logging_config import get_logger
from core.run_spec import RunSpec, RunSpecStep, load_run_spec
from core.run_spec_fields import optional_string, required_int, required_key, required_scalar
from store.flat_mapping import from_flat_mapping, to_flat_mapping
from store.step_store import StepStore

_LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class RunSpecExecutionContext:
    """In-memory context used to execute run-spec steps."""

    store: StepStore
    bindings: MutableMapping[str, object]


def execute_run_spec_file(
    spec_file: str,
    store: StepStore | None = None,
    bindings: MutableMapping[str, object] | None = None,
) -> tuple[str, ...]:
    """Load and execute a run-spec file, returning printable output lines."""
    spec = load_run_spec(spec_file)
    return execute_run_spec(spec, store=store, bindings=bindings)


def execute_run_spec(
    spec: RunSpec,
    store: StepStore | None = None,
    bindings: MutableMapping[str, object] | None = None,
) -> tuple[str, ...]:
    """Execute a parsed run-spec against one store.

    Args:
        spec: Validated run-spec.
        store: Store to mutate. Built from ``spec.initial`` (or empty)
            when omitted.
        bindings: Receives values of ``get`` steps that name a ``bind``.

    Returns:
        Output lines in step order.

    Raises:
        LedgerRunSpecError: If a store is given together with an initial mapping.
        LedgerOutOfBoundsError: If a rollback step is out of bounds.
    """
    if store is not None and spec.initial is not None:
        raise LedgerRunSpecError(
            "Run spec defines 'initial' but an existing store was supplied. "
            "Drop 'initial' or let the run spec build its own store."
        )
    if store is None:
        store = from_flat_mapping(spec.initial) if spec.initial is not None else StepStore()
    context = RunSpecExecutionContext(
        store=store,
        bindings=bindings if bindings is not None else {},
    )
    output_lines: list[str] = []
    for step in spec.steps:
        output_lines.extend(_execute_step(context, step))
    _LOGGER.info(
        "run_spec_completed",
        step_count=len(spec.steps),
        current_step=store.current_step,
        entry_count=store.entry_count,
    )
    return tuple(output_lines)


def render_flat_mapping(store: StepStore) -> str:
    """Render the flat compatibility mapping of a store as JSON."""
    return json.dumps(to_flat_mapping(store), sort_keys=True, default=str)


def _execute_step(context: RunSpecExecutionContext, step: RunSpecStep) -> tuple[str, ...]:
    store = context.store
    if step.command == "set":
        store.set(required_key(step.args), required_scalar(step.args, "value"))
        return ()
    if step.command == "get":
        return _execute_get_step(context, step)
    if step.command == "increment":
        store.increment()
        return ()
    if step.command == "rollback":
        store.rollback(required_int(step.args, "step"))
        return ()
    if step.command == "laststep":
        last_step = store.last_step(required_key(step.args))
        return (MISSING_VALUE_MARKER if last_step is None else str(last_step),)
    if step.command == "dump":
        return (render_flat_mapping(store),)
    raise LedgerRunSpecError(f"Unsupported run-spec command '{step.command}'.")


def _execute_get_step(context: RunSpecExecutionContext, step: RunSpecStep) -> tuple[str, ...]:
    resolved = context.store.resolve(required_key(step.args))
    bind_name = optional_string(step.args, "bind")
    if resolved is None:
        return (MISSING_VALUE_MARKER,)
    if bind_name is not None:
        context.bindings[bind_name] = resolved.value
        return ()
    return (str(resolved.value),)
