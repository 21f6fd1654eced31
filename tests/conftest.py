"""Pytest configuration for repository test runs."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Iterator

import pytest


def pytest_sessionstart() -> None:
    """Add src directory to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    src_path = project_root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


@pytest.fixture
def debug_logging() -> Iterator[None]:
    """Emit every structured log level so capture_logs sees info events."""
    from core.config import LedgerConfig
    from core.logging_config import configure_logging

    configure_logging(LedgerConfig(log_level="DEBUG"))
    yield
    configure_logging(LedgerConfig())
