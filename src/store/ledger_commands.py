"""Argv-style command surface for a step store.

This module maps ``set``/``get``/``increment``/``rollback``/``laststep``
command vectors onto store calls. A ``get`` either returns the value as
output or binds it into a caller-supplied variables mapping.
"""

from __future__ import annotations

from typing import MutableMapping, Sequence

from core.constants import UNKNOWN_COMMAND_MESSAGE
from core.errors import LedgerCommandError, LedgerInvalidStoreError, LedgerOutOfBoundsError
from core.types import CommandResult
from store.step_store import StepStore

SUPPORTED_COMMANDS = ("set", "get", "increment", "rollback", "laststep")

# command -> (min operands, max operands)
_OPERAND_COUNTS: dict[str, tuple[int, int]] = {
    "set": (2, 2),
    "get": (1, 2),
    "increment": (0, 0),
    "rollback": (1, 1),
    "laststep": (1, 1),
}
_NOT_FOUND = CommandResult(exit_code=1)
_OK = CommandResult(exit_code=0)


def execute_command(
    store: StepStore | None,
    argv: Sequence[str],
    variables: MutableMapping[str, object] | None = None,
) -> CommandResult:
    """Run one command vector against a store.

    Args:
        store: Target store.
        argv: Command name followed by its operands.
        variables: Output mapping for ``get KEY VAR`` bindings.

    Returns:
        Exit code and optional output text.

    Raises:
        LedgerInvalidStoreError: If no store was supplied.
        LedgerCommandError: If the command vector is empty, has the wrong
            number of operands, or binds without a variables mapping.
    """
    if not isinstance(store, StepStore):
        raise LedgerInvalidStoreError(
            "Invalid operation: store does not exist. Create a StepStore before issuing commands."
        )
    if not argv:
        raise LedgerCommandError(
            f"Empty command. Use one of: {', '.join(SUPPORTED_COMMANDS)}."
        )
    command, operands = argv[0], list(argv[1:])
    if command not in _OPERAND_COUNTS:
        return CommandResult(exit_code=1, output=UNKNOWN_COMMAND_MESSAGE)
    _check_operand_count(command, operands)
    if command == "set":
        store.set(operands[0], operands[1])
        return _OK
    if command == "get":
        return _run_get(store, operands, variables)
    if command == "increment":
        store.increment()
        return _OK
    if command == "rollback":
        return _run_rollback(store, operands[0])
    return _run_laststep(store, operands[0])


def _check_operand_count(command: str, operands: list[str]) -> None:
    minimum, maximum = _OPERAND_COUNTS[command]
    if minimum <= len(operands) <= maximum:
        return
    expected = str(minimum) if minimum == maximum else f"{minimum}-{maximum}"
    raise LedgerCommandError(
        f"Command '{command}' takes {expected} operand(s), got {len(operands)}."
    )


def _run_get(
    store: StepStore,
    operands: list[str],
    variables: MutableMapping[str, object] | None,
) -> CommandResult:
    resolved = store.resolve(operands[0])
    if len(operands) == 1:
        if resolved is None:
            return _NOT_FOUND
        return CommandResult(exit_code=0, output=str(resolved.value))
    if variables is None:
        raise LedgerCommandError(
            f"Cannot bind '{operands[1]}': no variables mapping was supplied. "
            "Pass variables= to execute_command."
        )
    if resolved is None:
        return _NOT_FOUND
    variables[operands[1]] = resolved.value
    return _OK


def _run_rollback(store: StepStore, raw_step: str) -> CommandResult:
    try:
        target_step = int(raw_step)
    except ValueError:
        return CommandResult(exit_code=1, output=f"rollback step is not an integer: {raw_step}")
    try:
        store.rollback(target_step)
    except LedgerOutOfBoundsError as error:
        return CommandResult(exit_code=1, output=f"rollback out of bounds.  {error.bound}.")
    return _OK


def _run_laststep(store: StepStore, key: str) -> CommandResult:
    step = store.last_step(key)
    if step is None:
        return _NOT_FOUND
    return CommandResult(exit_code=0, output=str(step))
