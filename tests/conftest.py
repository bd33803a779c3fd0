"""Shared pytest fixtures for Novarc tests."""

from pathlib import Path

import pytest

from novarc.core.environment import HISTORY_FILE_VAR, MAX_DEPTH_VAR, SHOW_AST_VAR


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's NOVARC_* settings out of the tests."""
    for var in (MAX_DEPTH_VAR, HISTORY_FILE_VAR, SHOW_AST_VAR):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def history_file(tmp_path: Path) -> Path:
    """Return a REPL history path inside the test's temp directory."""
    return tmp_path / "history.txt"
