"""Fixtures for CLI tests."""

from pathlib import Path

import pytest


@pytest.fixture
def cli_install_dir(install_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the CLI at the temporary automation tree."""
    monkeypatch.setenv("ADACTL_INSTALL_DIR", str(install_dir))
    return install_dir


@pytest.fixture(autouse=True)
def wide_terminal(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep Rich from soft-wrapping CLI output at the runner's default 80 columns."""
    monkeypatch.setenv("COLUMNS", "200")
