"""Stepledger CLI entry points.
This module exposes the shell and run-spec commands.
It maps argparse commands onto in-memory store workflows.
"""

from __future__ import annotations

import argparse
from dataclasses import replace
from typing import Sequence

from cli.run_spec_command import add_run_spec_command, run_run_spec_command
from cli.shell_command import add_shell_command, run_shell_command
from core.config import LedgerConfig, parse_log_level
from core.constants import SUPPORTED_LOG_LEVELS
from core.logging_config import configure_logging


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="stepledger",
        description="Step-versioned in-memory key-value ledger",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=SUPPORTED_LOG_LEVELS,
        help="Override STEPLEDGER_LOG_LEVEL for this command",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    add_shell_command(subparsers)
    add_run_spec_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the stepledger CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(_build_config(args.log_level))
    if args.command == "shell":
        return run_shell_command(args)
    if args.command == "run-spec":
        return run_run_spec_command(args)
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_config(log_level: str | None) -> LedgerConfig:
    """Build runtime config with optional log-level override.

    Args:
        log_level: Optional override level.

    Returns:
        Validated runtime config.
    """
    config = LedgerConfig.from_env()
    if log_level:
        config = replace(config, log_level=parse_log_level(log_level))
    return config
