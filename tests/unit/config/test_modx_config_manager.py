"""Tests for layered configuration loading."""
from __future__ import annotations

from pathlib import Path

import pytest

from helpers.templates import write_project_config
from modx.core.config import ConfigManager, get_cached_config, is_cached
from modx.core.exceptions import ConfigError


class TestConfigLayers:
    def test_bundled_defaults(self, project: Path) -> None:
        cfg = ConfigManager(project).load_config()

        assert cfg["templates"]["paths"] == ["templates"]
        assert cfg["templates"]["extension"] == ".modx"
        assert cfg["templates"]["max_iterations"] == 100
        assert cfg["cache"]["ttl"] == 3600
        assert cfg["cache"]["store"] == "filesystem"
        assert cfg["render"]["dump_compiled"] is False

    def test_project_config_overrides_defaults(self, project: Path) -> None:
        write_project_config(project, "cache", {"cache": {"ttl": 60, "store": "memory"}})
        cfg = ConfigManager(project).load_config()

        assert cfg["cache"]["ttl"] == 60
        assert cfg["cache"]["store"] == "memory"
        assert cfg["cache"]["namespace"] == "template"

    def test_project_files_merge_alphabetically(self, project: Path) -> None:
        write_project_config(project, "a", {"cache": {"ttl": 1}})
        write_project_config(project, "b", {"cache": {"ttl": 2}})
        assert ConfigManager(project).get("cache.ttl") == 2

    def test_list_append_marker(self, project: Path) -> None:
        write_project_config(project, "paths", {"templates": {"paths": ["+", "vendor"]}})
        assert ConfigManager(project).get("templates.paths") == ["templates", "vendor"]

    def test_env_overrides_win(self, project: Path, monkeypatch) -> None:
        write_project_config(project, "cache", {"cache": {"ttl": 60}})
        monkeypatch.setenv("MODX_CACHE__TTL", "5")
        monkeypatch.setenv("MODX_CACHE__ENABLED", "false")
        monkeypatch.setenv("MODX_TEMPLATES__PATHS", '["views", "more"]')

        manager = ConfigManager(project)
        assert manager.get("cache.ttl") == 5
        assert manager.get("cache.enabled") is False
        assert manager.get("templates.paths") == ["views", "more"]

    def test_env_sets_string_value(self, project: Path, monkeypatch) -> None:
        monkeypatch.setenv("MODX_TEMPLATES__DEFAULT_LAYOUT", "main")
        assert ConfigManager(project).get("templates.default_layout") == "main"

    def test_malformed_env_key_raises(self, project: Path, monkeypatch) -> None:
        monkeypatch.setenv("MODX_CACHE____TTL", "5")
        with pytest.raises(ConfigError):
            ConfigManager(project).load_config()

    def test_get_with_default(self, project: Path) -> None:
        manager = ConfigManager(project)
        assert manager.get("nope.missing", "fallback") == "fallback"
        assert isinstance(manager.get_all(), dict)


class TestValidation:
    def test_unknown_store_is_rejected(self, project: Path) -> None:
        write_project_config(project, "cache", {"cache": {"store": "redis"}})
        with pytest.raises(ConfigError) as exc:
            ConfigManager(project).load_config()
        assert "cache.store" in str(exc.value)

    def test_unknown_key_in_section_is_rejected(self, project: Path) -> None:
        write_project_config(project, "t", {"templates": {"pathz": ["x"]}})
        with pytest.raises(ConfigError):
            ConfigManager(project).load_config()

    def test_max_iterations_must_be_positive(self, project: Path) -> None:
        write_project_config(project, "t", {"templates": {"max_iterations": 0}})
        with pytest.raises(ConfigError):
            ConfigManager(project).load_config()

    def test_non_mapping_project_file_is_config_error(self, project: Path) -> None:
        cfg_dir = project / ".modx" / "config"
        cfg_dir.mkdir(parents=True)
        (cfg_dir / "bad.yaml").write_text("- just\n- a list\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            ConfigManager(project).load_config()


class TestCaching:
    def test_same_dict_until_config_changes(self, project: Path) -> None:
        first = get_cached_config(project)
        assert is_cached(project)
        assert get_cached_config(project) is first

        write_project_config(project, "cache", {"cache": {"ttl": 7}})
        second = get_cached_config(project)
        assert second is not first
        assert second["cache"]["ttl"] == 7

    def test_env_change_invalidates(self, project: Path, monkeypatch) -> None:
        first = get_cached_config(project)
        monkeypatch.setenv("MODX_CACHE__TTL", "9")
        assert get_cached_config(project)["cache"]["ttl"] == 9
        assert first["cache"]["ttl"] == 3600
