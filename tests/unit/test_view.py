"""Tests for the configuration-driven View facade."""
from __future__ import annotations

from pathlib import Path

import pytest

from helpers.templates import write_templates
from modx.core.cache import FilesystemCacheStore
from modx.core.exceptions import ConfigError, TemplateDirectoryError
from modx.core.view import View


class TestView:
    def test_render_with_values_and_layout(self, project: Path) -> None:
        write_templates(
            project / "views",
            {"page": "<: title :>/<: n :>", "layouts/main": "<main><: content :></main>"},
        )
        view = View(project, template_paths=["views"], cache_dir="var/cache", namespace="site", ttl=30)

        out = view.with_value("title", "Hi").with_data({"n": 2}).layout("main").render("page")

        assert out == "<main>Hi/2</main>"
        assert isinstance(view.engine.cache.store, FilesystemCacheStore)
        assert view.engine.cache.default_ttl == 30
        assert list((project / "var" / "cache").glob("site_page_*.cache.json"))

    def test_clear_cache(self, project: Path) -> None:
        write_templates(project / "templates", {"page": "p"})
        view = View(project)
        view.render("page")

        assert view.clear_cache("page") is True
        assert view.clear_cache() is True

    def test_custom_layout_and_component_directories(self, project: Path) -> None:
        write_templates(
            project / "templates",
            {"page": '<: layout "base" :><: component card >', "frames/base": "[<: content :>]", "parts/card": "c"},
        )
        view = View(project, layouts_dir="frames", components_dir="parts")
        assert view.render("page") == "[c]"

    def test_create_paths(self, project: Path) -> None:
        View(project, template_paths=["new/templates"], create_paths=True)
        assert (project / "new" / "templates").is_dir()

    def test_missing_directory_without_create(self, project: Path) -> None:
        with pytest.raises(TemplateDirectoryError):
            View(project, template_paths=["absent"])

    def test_invalid_override_is_rejected(self, project: Path) -> None:
        with pytest.raises(ConfigError):
            View(project, namespace="bad name!")
