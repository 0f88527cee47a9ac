"""Tests for the handlers command."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from patchbay.cli import cli


@pytest.mark.usefixtures("_isolated_workspace")
class TestHandlersCommand:
    def test_defaults(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "handlers"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)["data"]
        assert data["strategy"] == "observer"
        assert data["handlers"] == ["audit"]

    def test_strategy_override(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--strategy", "chain", "handlers"])
        assert result.exit_code == 0
        assert "strategy: chain" in result.stdout

    def test_from_config(self, cli_runner: CliRunner, workspace: Path) -> None:
        (workspace / "patchbay.toml").write_text('[pipeline]\nhandlers = ["audit", "cache"]\n')
        result = cli_runner.invoke(cli, ["--json", "handlers"])
        assert json.loads(result.stdout)["data"]["handlers"] == ["audit", "cache"]
