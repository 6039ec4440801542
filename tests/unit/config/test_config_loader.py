"""Unit tests for configuration loading."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from stache.config import (
    EngineConfig,
    LogFormat,
    LogLevel,
    deep_merge,
    load_config,
    parse_env_vars,
    read_toml_file,
    set_nested_key,
)
from stache.exceptions import ConfigError, ConfigLoadError

if TYPE_CHECKING:
    from pyfakefs.fake_filesystem import FakeFilesystem


class TestReadTomlFile:
    def test_reads_tables(self, fs: FakeFilesystem) -> None:
        fs.create_file("/cfg.toml", contents='[logging]\nlevel = "debug"\n')

        assert read_toml_file(Path("/cfg.toml")) == {"logging": {"level": "debug"}}

    def test_parse_error_has_location(self, fs: FakeFilesystem) -> None:
        fs.create_file("/cfg.toml", contents="a = 1\nb = \n")

        with pytest.raises(ConfigLoadError) as exc_info:
            _ = read_toml_file(Path("/cfg.toml"))

        assert exc_info.value.path == Path("/cfg.toml")
        assert "line 2" in str(exc_info.value)

    def test_missing_file(self, fs: FakeFilesystem) -> None:
        with pytest.raises(FileNotFoundError):
            _ = read_toml_file(Path("/missing.toml"))


class TestDeepMerge:
    def test_merges_nested_tables(self) -> None:
        base = {"logging": {"level": "info", "format": "text"}, "extension": ""}
        override = {"logging": {"level": "debug"}}

        assert deep_merge(base, override) == {
            "logging": {"level": "debug", "format": "text"},
            "extension": "",
        }

    def test_lists_are_replaced(self) -> None:
        assert deep_merge({"search_path": ["a", "b"]}, {"search_path": ["c"]}) == {
            "search_path": ["c"]
        }

    def test_inputs_are_not_modified(self) -> None:
        base = {"logging": {"level": "info"}}

        _ = deep_merge(base, {"logging": {"level": "debug"}})

        assert base == {"logging": {"level": "info"}}


class TestSetNestedKey:
    def test_creates_tables(self) -> None:
        data: dict[str, object] = {}

        set_nested_key(data, "logging.level", "debug")

        assert data == {"logging": {"level": "debug"}}

    def test_replaces_non_table_parent(self) -> None:
        data: dict[str, object] = {"logging": "x"}

        set_nested_key(data, "logging.level", "debug")

        assert data == {"logging": {"level": "debug"}}


@pytest.mark.usefixtures("clean_env")
class TestParseEnvVars:
    def test_nested_keys_and_types(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("STACHE_MAX_DEPTH", "12")
        monkeypatch.setenv("STACHE_LOGGING__LEVEL", "debug")
        monkeypatch.setenv("STACHE_SEARCH_PATH", '["a", "b"]')
        monkeypatch.setenv("STACHE_FLAG", "TRUE")

        assert parse_env_vars() == {
            "max_depth": 12,
            "logging": {"level": "debug"},
            "search_path": ["a", "b"],
            "flag": True,
        }

    def test_invalid_json_list_stays_a_string(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("STACHE_EXTENSION", "[oops")
        monkeypatch.setenv("STACHE_SEARCH_PATH", "[not json]")

        assert parse_env_vars() == {"extension": "[oops", "search_path": "[not json]"}

    def test_ignores_bare_prefix(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("STACHE_", "x")

        assert parse_env_vars() == {}


@pytest.mark.usefixtures("clean_env")
class TestLoadConfig:
    def test_defaults(self) -> None:
        config = load_config()

        assert config == EngineConfig()
        assert config.search_path == (Path(),)
        assert config.logging.level is LogLevel.WARNING
        assert config.logging.format is LogFormat.TEXT

    def test_reads_stache_toml(self, tmp_path: Path) -> None:
        config_file = tmp_path / "stache.toml"
        _ = config_file.write_text(
            'search_path = "templates"\nmax_depth = 7\n[logging]\nformat = "json"\n'
        )

        config = load_config(config_file)

        assert config.search_path == (tmp_path / "templates",)
        assert config.max_depth == 7
        assert config.logging.format is LogFormat.JSON

    def test_absolute_search_path_is_kept(self, tmp_path: Path) -> None:
        config_file = tmp_path / "stache.toml"
        _ = config_file.write_text('search_path = ["/srv/templates"]\n')

        config = load_config(config_file)

        assert config.search_path == (Path("/srv/templates"),)

    def test_reads_pyproject_tool_table(self, tmp_path: Path) -> None:
        config_file = tmp_path / "pyproject.toml"
        _ = config_file.write_text(
            '[project]\nname = "site"\n\n[tool.stache]\nextension = ".mustache"\n'
        )

        config = load_config(config_file)

        assert config.extension == ".mustache"

    def test_pyproject_without_table_uses_defaults(self, tmp_path: Path) -> None:
        config_file = tmp_path / "pyproject.toml"
        _ = config_file.write_text('[project]\nname = "site"\n')

        assert load_config(config_file) == EngineConfig()

    def test_environment_overrides_file(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        config_file = tmp_path / "stache.toml"
        _ = config_file.write_text("max_depth = 7\n")
        monkeypatch.setenv("STACHE_MAX_DEPTH", "9")

        assert load_config(config_file).max_depth == 9

    def test_environment_can_be_ignored(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("STACHE_MAX_DEPTH", "9")

        assert load_config(env=False).max_depth == EngineConfig().max_depth

    def test_unknown_keys_are_ignored(self, tmp_path: Path) -> None:
        config_file = tmp_path / "stache.toml"
        _ = config_file.write_text("colour = true\n")

        assert load_config(config_file) == EngineConfig()

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigLoadError, match="could not be read"):
            _ = load_config(tmp_path / "nope.toml")

    def test_invalid_value(self, tmp_path: Path) -> None:
        config_file = tmp_path / "stache.toml"
        _ = config_file.write_text("max_depth = 0\n")

        with pytest.raises(ConfigError, match="Invalid configuration"):
            _ = load_config(config_file)

    def test_invalid_log_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("STACHE_LOGGING__LEVEL", "loud")

        with pytest.raises(ConfigError):
            _ = load_config()
