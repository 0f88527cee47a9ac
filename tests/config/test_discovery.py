"""Tests for config discovery and loading."""

from pathlib import Path

import pytest

from patchbay.config.discovery import (
    CONFIG_ENV_VAR,
    find_config,
    load_config,
    locate_config,
    read_toml,
)
from patchbay.config.models import PatchbayConfig
from patchbay.domain.errors import ConfigurationError


class TestFindConfig:
    def test_walks_up(self, tmp_path: Path) -> None:
        (tmp_path / "patchbay.toml").write_text("")
        deep = tmp_path / "a" / "b"
        deep.mkdir(parents=True)
        assert find_config(deep) == (tmp_path / "patchbay.toml").resolve()

    def test_env_var_wins(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        custom = tmp_path / "elsewhere.toml"
        custom.write_text("")
        (tmp_path / "patchbay.toml").write_text("")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(custom))
        assert find_config(tmp_path) == custom

    def test_env_var_missing_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "nope.toml"))
        assert find_config(tmp_path) is None


class TestLoadConfig:
    def test_no_file_gives_defaults(self, tmp_path: Path) -> None:
        assert load_config(cwd=tmp_path) == PatchbayConfig()

    def test_explicit_path(self, tmp_path: Path) -> None:
        path = tmp_path / "x.toml"
        path.write_text('[store]\npath = "data/records.db"\n[networks.vk]\napi_base = "https://vk.test"\n')
        config = load_config(path)
        assert config.store.path == Path("data/records.db")
        assert config.networks.vk.api_base == "https://vk.test"
        assert config.networks.twitter.api_base is None

    def test_invalid_toml_names_file(self, tmp_path: Path) -> None:
        path = tmp_path / "patchbay.toml"
        path.write_text("[pipeline\nstrategy = ")
        with pytest.raises(ConfigurationError, match="Invalid TOML in") as exc_info:
            load_config(path)
        assert str(path) in str(exc_info.value)
        assert exc_info.value.code == "CONFIG_ERROR"


class TestLocateConfig:
    def test_explicit_path_wins_over_walk_up(self, tmp_path: Path) -> None:
        (tmp_path / "patchbay.toml").write_text("")
        explicit = tmp_path / "other.toml"
        explicit.write_text("")
        assert locate_config(str(explicit), tmp_path) == explicit

    def test_missing_explicit_path_means_no_config(self, tmp_path: Path) -> None:
        (tmp_path / "patchbay.toml").write_text("")
        assert locate_config(tmp_path / "absent.toml", tmp_path) is None

    def test_falls_back_to_walk_up(self, tmp_path: Path) -> None:
        (tmp_path / "patchbay.toml").write_text("")
        assert locate_config(None, tmp_path) == (tmp_path / "patchbay.toml").resolve()


class TestReadToml:
    def test_parses_sections(self, tmp_path: Path) -> None:
        path = tmp_path / "patchbay.toml"
        path.write_text('[pipeline]\nhandlers = ["audit"]\n')
        assert read_toml(path) == {"pipeline": {"handlers": ["audit"]}}
