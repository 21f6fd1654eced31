"""Line-oriented shell command wiring for the stepledger CLI.

This module reads argv-style store commands from a script or stdin and
runs them against one in-memory store. Values bound by ``get KEY VAR``
are substituted into later lines as ``$VAR``.
"""

from __future__ import annotations

import argparse
import shlex
import string
import sys
from pathlib import Path
from typing import Any

from core.constants import SHELL_COMMENT_PREFIX
from core.errors import LedgerCommandError
from core.run_spec_execution import render_flat_mapping
from store.ledger_commands import execute_command
from store.step_store import StepStore


def add_shell_command(subparsers: Any) -> None:
    """Register shell subcommand."""
    parser = subparsers.add_parser(
        "shell",
        help="Run set/get/increment/rollback/laststep lines against one store",
    )
    parser.add_argument("--script", help="Command script file; reads stdin when omitted")
    parser.add_argument(
        "--dump",
        action="store_true",
        help="Print the flat key mapping as JSON after the last command",
    )


def run_shell_command(args: argparse.Namespace) -> int:
    """Handle shell command invocation.

    Args:
        args: Parsed CLI args.

    Returns:
        0 when every command succeeded, else 1.
    """
    try:
        lines = _read_script_lines(args.script)
    except LedgerCommandError as error:
        print(f"shell_error={error}")
        return 1
    store = StepStore()
    variables: dict[str, object] = {}
    exit_code = 0
    for line_number, line in enumerate(lines, start=1):
        if line.lstrip().startswith(SHELL_COMMENT_PREFIX):
            continue
        try:
            argv = shlex.split(string.Template(line).safe_substitute(variables))
        except ValueError as error:
            print(f"line {line_number}: {error}")
            exit_code = 1
            continue
        if not argv:
            continue
        try:
            result = execute_command(store, argv, variables)
        except LedgerCommandError as error:
            print(f"line {line_number}: {error}")
            exit_code = 1
            continue
        if result.output is not None:
            print(result.output)
        if not result.ok:
            exit_code = 1
    if args.dump:
        print(render_flat_mapping(store))
    return exit_code


def _read_script_lines(script_path: str | None) -> list[str]:
    if script_path is None:
        return sys.stdin.read().splitlines()
    script_file = Path(script_path).expanduser()
    if not script_file.is_file():
        raise LedgerCommandError(
            f"Command script does not exist at {script_file}. Provide a readable file path."
        )
    return script_file.read_text(encoding="utf-8").splitlines()
