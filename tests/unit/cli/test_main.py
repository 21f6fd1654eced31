"""Unit tests for CLI command handling."""

from __future__ import annotations

import pytest

from cli.main import build_parser, main
from core.errors import LedgerConfigError


def test_cli_requires_subcommand(capsys: pytest.CaptureFixture[str]) -> None:
    """Invoking without a subcommand should exit with usage error."""
    with pytest.raises(SystemExit) as exit_info:
        main([])

    assert exit_info.value.code == 2 and "usage" in capsys.readouterr().err


def test_cli_log_level_flag_is_case_insensitive() -> None:
    """The --log-level override should accept lower-case names."""
    args = build_parser().parse_args(["--log-level", "debug", "run-spec", "flow.yaml"])

    assert args.log_level == "DEBUG" and args.spec_file == "flow.yaml"


def test_cli_rejects_invalid_env_level(monkeypatch: pytest.MonkeyPatch) -> None:
    """An invalid environment level should fail config validation."""
    monkeypatch.setenv("STEPLEDGER_LOG_LEVEL", "chatty")

    with pytest.raises(LedgerConfigError):
        main(["shell", "--script", "missing.ld"])
    assert True
