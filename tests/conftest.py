"""Pytest configuration for test isolation.

The CLI resolves settings from ``LEDGER_*`` environment variables (possibly
populated from a developer's local ``.env``). Tests must not see those, so an
autouse fixture clears them and runs each test from its own temporary
directory, where no ``.env`` exists.
"""

from __future__ import annotations

import textwrap
from collections.abc import Callable
from pathlib import Path

import pytest

_ENV_VARS = (
    "LEDGER_INPUT_DIR",
    "LEDGER_OUTPUT_DIR",
    "LEDGER_FORMATS_PATH",
    "LEDGER_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _isolate_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def write_csv(tmp_path: Path) -> Callable[[str, str], Path]:
    """Return a helper that writes dedented CSV text to ``tmp_path/<name>``."""

    def _write(name: str, text: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(text).lstrip("\n"), encoding="utf-8")
        return path

    return _write
