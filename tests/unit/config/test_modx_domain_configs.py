"""Tests for the typed domain config accessors."""
from __future__ import annotations

from pathlib import Path

import pytest

from helpers.templates import write_project_config
from modx.core.config import (
    BaseDomainConfig,
    CacheConfig,
    LoggingConfig,
    RenderConfig,
    TemplatesConfig,
)


class TestBaseDomainConfig:
    def test_base_config_is_abstract(self) -> None:
        with pytest.raises(TypeError):
            BaseDomainConfig()  # type: ignore[abstract]

    def test_missing_section_is_empty(self, project: Path) -> None:
        class Extra(BaseDomainConfig):
            def _config_section(self) -> str:
                return "extra"

        assert Extra(project).section == {}

    def test_explicit_config_dict_is_used(self, project: Path) -> None:
        cfg = CacheConfig(project, config={"cache": {"ttl": 12}})
        assert cfg.ttl == 12
        assert cfg.namespace == "template"


class TestDomainConfigs:
    def test_templates_defaults(self, project: Path) -> None:
        cfg = TemplatesConfig(project)

        assert cfg.paths == [project.resolve() / "templates"]
        assert cfg.extension == ".modx"
        assert cfg.layouts_dir == "layouts"
        assert cfg.components_dir == "components"
        assert cfg.create_missing is False
        assert cfg.max_iterations == 100
        assert cfg.default_layout is None

    def test_absolute_template_path_is_kept(self, project: Path, tmp_path_factory) -> None:
        elsewhere = tmp_path_factory.mktemp("shared")
        write_project_config(project, "t", {"templates": {"paths": [str(elsewhere), "local"]}})
        cfg = TemplatesConfig(project)

        assert cfg.paths == [elsewhere, project.resolve() / "local"]

    def test_cache_defaults(self, project: Path) -> None:
        cfg = CacheConfig(project)

        assert cfg.enabled is True
        assert cfg.store == "filesystem"
        assert cfg.directory == project.resolve() / ".modx" / "cache"
        assert cfg.ttl == 3600

    def test_render_dump_dir_only_when_enabled(self, project: Path) -> None:
        assert RenderConfig(project).dump_dir is None

        write_project_config(project, "r", {"render": {"dump_compiled": True}})
        assert RenderConfig(project).dump_dir == project.resolve() / ".modx" / "compiled"

    def test_logging_config(self, project: Path) -> None:
        write_project_config(project, "l", {"logging": {"level": "DEBUG", "file": "logs/modx.log"}})
        cfg = LoggingConfig(project)

        assert cfg.level == "DEBUG"
        assert cfg.file == project.resolve() / "logs" / "modx.log"
