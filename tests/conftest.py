"""Pytest configuration for test isolation.

Every test gets its own data directory via ``DAYS_HOME`` so nothing touches
the real ``~/.days``. Logging configured by a CLI test is torn down again
because its handler is bound to the stderr stream of that one invocation.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

# Make sure the workspace `packages/` dir is on sys.path so `days` is importable
# without an install, and the repo root so `tests.helpers` resolves.
_ROOT = Path(__file__).resolve().parents[1]
_PKG_DIR = _ROOT / "packages"
sys.path[:0] = [p for p in [str(_PKG_DIR), str(_ROOT)] if p not in sys.path]

from days.logging_setup import reset_logging  # noqa: E402


@pytest.fixture(autouse=True)
def _isolate_data_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point ``DAYS_HOME`` at a per-test directory that already exists."""

    data_dir = tmp_path / "days-home"
    data_dir.mkdir(parents=True, exist_ok=True)
    monkeypatch.setenv("DAYS_HOME", os.fspath(data_dir))
    monkeypatch.delenv("DAYS_LOG_LEVEL", raising=False)
    return data_dir


@pytest.fixture(autouse=True)
def _reset_logging():
    reset_logging()
    yield
    reset_logging()


@pytest.fixture
def data_dir(_isolate_data_dir: Path) -> Path:
    return _isolate_data_dir


@pytest.fixture
def events_path(data_dir: Path) -> Path:
    return data_dir / "events.csv"
