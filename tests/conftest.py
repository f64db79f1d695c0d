"""Pytest configuration for repository test runs."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest
import structlog

_FORMFILTER_ENV_VARS = (
    "FORMFILTER_SOURCE",
    "FORMFILTER_API_TOKEN",
    "FORMFILTER_TIMEOUT_SECONDS",
    "FORMFILTER_LOG_LEVEL",
)


def pytest_sessionstart() -> None:
    """Add src directory to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    src_path = project_root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


@pytest.fixture(autouse=True)
def isolated_formfilter_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Hide FORMFILTER_* variables from the developer shell."""
    for name in _FORMFILTER_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def reset_structlog() -> None:
    """Drop logging configuration left behind by earlier CLI runs."""
    from core.logging_config import configure_logging

    structlog.reset_defaults()
    configure_logging()
