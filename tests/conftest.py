"""Shared pytest fixtures and test helpers for patchbay tests."""

from __future__ import annotations

import logging
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner
from sqlalchemy.engine import Engine

from patchbay.config.settings import PatchbaySettings
from patchbay.infrastructure.database.engine import init_database
from patchbay.infrastructure.hub import Hub


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Undo any configure_logging() done by the CLI under test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    pb = logging.getLogger("patchbay")
    pb_level = pb.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    pb.setLevel(pb_level)


@pytest.fixture(autouse=True)
def _no_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's PATCHBAY_* environment out of tests."""
    import os

    for key in list(os.environ):
        if key.startswith("PATCHBAY_"):
            monkeypatch.delenv(key)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def db_engine(tmp_path: Path) -> Generator[Engine]:
    """Initialized SQLite engine with all tables created."""
    engine = init_database(tmp_path / "patchbay.db")
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Temporary workspace with a ``logs/`` directory and a sample log."""
    logs = tmp_path / "logs"
    logs.mkdir()
    (logs / "app.log").write_text(
        "2024-05-01T10:00:00 INFO service started\n"
        "2024-05-01T10:00:05 WARN disk at 91%\n"
        "\n"
        "free-form line\n"
        "2024-05-01T10:01:00 ERROR request failed\n",
        encoding="utf-8",
    )
    return tmp_path


@pytest.fixture
def make_settings(workspace: Path) -> Callable[..., PatchbaySettings]:
    """Factory for settings rooted at the workspace, without any TOML file."""

    def _make(**overrides: Any) -> PatchbaySettings:
        return PatchbaySettings(root=workspace, **overrides)

    return _make


@pytest.fixture
def settings(make_settings: Callable[..., PatchbaySettings]) -> PatchbaySettings:
    return make_settings()


@pytest.fixture
def hub(settings: PatchbaySettings) -> Generator[Hub]:
    """Hub on the temp workspace, closed after the test."""
    h = Hub(settings)
    try:
        yield h
    finally:
        h.close()


@pytest.fixture
def _isolated_workspace(workspace: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to the temp workspace so the CLI builds an isolated hub.

    Use via ``@pytest.mark.usefixtures("_isolated_workspace")`` on command
    test classes.
    """
    monkeypatch.chdir(workspace)
