"""Unit tests for structured logging setup."""

from __future__ import annotations

import json

import pytest

from core.config import LedgerConfig
from core.logging_config import configure_logging, get_logger


def test_json_logging_writes_structured_lines_to_stderr(
    capsys: pytest.CaptureFixture[str],
) -> None:
    """JSON format should emit one parseable object per event on stderr."""
    configure_logging(LedgerConfig(log_level="INFO", log_format="json"))
    logger = get_logger("tests.logging")

    logger.info("ledger_step_logged", step=3)
    captured = capsys.readouterr()
    configure_logging(LedgerConfig())

    payload = json.loads(captured.err.strip().splitlines()[-1])
    assert (
        captured.out == ""
        and payload["event"] == "ledger_step_logged"
        and payload["step"] == 3
        and payload["level"] == "info"
        and payload["logger_name"] == "tests.logging"
    )


def test_level_filter_drops_lower_events(capsys: pytest.CaptureFixture[str]) -> None:
    """Events below the configured level should not be written."""
    configure_logging(LedgerConfig(log_level="WARNING"))
    logger = get_logger("tests.logging")

    logger.info("ledger_hidden")
    captured = capsys.readouterr()

    assert "ledger_hidden" not in captured.err
