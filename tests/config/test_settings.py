"""Tests for PatchbaySettings — unified settings with TOML source."""

from pathlib import Path

import click
import pytest
from pydantic import ValidationError

from patchbay.config.settings import PatchbaySettings
from patchbay.domain.types import CompositionStrategy, PassValue


class TestPatchbaySettingsDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        """With no TOML and no env vars, all fields use code defaults."""
        settings = PatchbaySettings.from_cli(root=tmp_path)
        assert settings.root == tmp_path
        assert settings.config_path is None
        assert settings.json_output is False
        assert settings.pipeline.strategy is CompositionStrategy.OBSERVER
        assert settings.pipeline.pass_value is PassValue.OUTPUT
        assert settings.pipeline.handlers == ["audit"]
        assert settings.sources.ftp.host is None

    def test_frozen(self, tmp_path: Path) -> None:
        settings = PatchbaySettings.from_cli(root=tmp_path)
        with pytest.raises(ValidationError):
            settings.quiet = True  # type: ignore[misc]


class TestTomlSource:
    def test_loads_from_toml(self, tmp_path: Path) -> None:
        (tmp_path / "patchbay.toml").write_text(
            '[pipeline]\nstrategy = "chain"\nhandlers = ["audit", "cache"]\n'
            '[sources.http]\nbase_url = "https://logs.test"\n'
        )
        settings = PatchbaySettings.from_cli(root=tmp_path)
        assert settings.pipeline.strategy is CompositionStrategy.CHAIN
        assert settings.pipeline.handlers == ["audit", "cache"]
        assert settings.sources.http.base_url == "https://logs.test"
        assert settings.sources.http.timeout == 10.0  # default preserved

    def test_empty_toml_uses_defaults(self, tmp_path: Path) -> None:
        (tmp_path / "patchbay.toml").write_text("")
        settings = PatchbaySettings.from_cli(root=tmp_path)
        assert settings.pipeline.handlers == ["audit"]
        assert settings.config_path == tmp_path / "patchbay.toml"

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom" / "my.toml"
        custom.parent.mkdir(parents=True)
        custom.write_text('[mail]\nhost = "smtp.test"\n')
        settings = PatchbaySettings.from_cli(config_path=str(custom), root=tmp_path)
        assert settings.mail.host == "smtp.test"
        assert settings.config_path == custom

    def test_invalid_toml(self, tmp_path: Path) -> None:
        (tmp_path / "patchbay.toml").write_text("[pipeline\n")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            PatchbaySettings.from_cli(root=tmp_path)

    def test_invalid_strategy(self, tmp_path: Path) -> None:
        (tmp_path / "patchbay.toml").write_text('[pipeline]\nstrategy = "broadcast"\n')
        with pytest.raises(ValidationError):
            PatchbaySettings.from_cli(root=tmp_path)


class TestCliFlags:
    def test_cli_flags_override(self, tmp_path: Path) -> None:
        settings = PatchbaySettings.from_cli(
            root=tmp_path, json_output=True, quiet=True, verbose=True
        )
        assert settings.json_output is True
        assert settings.quiet is True
        assert settings.verbose is True

    def test_section_flag_merges_with_toml(self, tmp_path: Path) -> None:
        (tmp_path / "patchbay.toml").write_text('[pipeline]\nhandlers = ["cache"]\n')
        settings = PatchbaySettings.from_cli(root=tmp_path, pipeline={"strategy": "chain"})
        assert settings.pipeline.strategy is CompositionStrategy.CHAIN
        assert settings.pipeline.handlers == ["cache"]

    def test_none_flags_dropped(self, tmp_path: Path) -> None:
        (tmp_path / "patchbay.toml").write_text('[pipeline]\nstrategy = "chain"\n')
        settings = PatchbaySettings.from_cli(root=tmp_path, pipeline=None)
        assert settings.pipeline.strategy is CompositionStrategy.CHAIN


class TestRootResolution:
    def test_root_from_toml_location(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """When no explicit root, use parent of discovered patchbay.toml."""
        subdir = tmp_path / "sub" / "deep"
        subdir.mkdir(parents=True)
        (tmp_path / "patchbay.toml").write_text("")
        monkeypatch.chdir(subdir)
        settings = PatchbaySettings.from_cli()
        assert settings.root == tmp_path.resolve()

    def test_resolve_path(self, tmp_path: Path) -> None:
        settings = PatchbaySettings.from_cli(root=tmp_path)
        assert settings.resolve_path(Path("a/b")) == tmp_path / "a" / "b"
        assert settings.resolve_path(Path("/abs")) == Path("/abs")


class TestEnvVars:
    def test_env_var_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PATCHBAY_QUIET", "true")
        assert PatchbaySettings.from_cli(root=tmp_path).quiet is True

    def test_nested_env_var_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PATCHBAY_MAIL__PORT", "2525")
        assert PatchbaySettings.from_cli(root=tmp_path).mail.port == 2525

    def test_env_beats_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "patchbay.toml").write_text('[pipeline]\nstrategy = "chain"\n')
        monkeypatch.setenv("PATCHBAY_PIPELINE__STRATEGY", "observer")
        settings = PatchbaySettings.from_cli(root=tmp_path)
        assert settings.pipeline.strategy is CompositionStrategy.OBSERVER
