"""Configuration-driven rendering facade.

``View`` builds its engine from layered configuration; keyword arguments
override the matching config keys for this instance only.

Usage:
    view = View(template_paths=["templates"], cache_dir=".modx/cache")
    html = view.with_value("title", "Hi").layout("main").render("page")
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Sequence

from modx.core.engine import ModxEngine


class View:
    def __init__(
        self,
        repo_root: Optional[Path] = None,
        *,
        template_paths: Optional[Sequence[str | Path]] = None,
        cache_dir: Optional[str | Path] = None,
        layouts_dir: Optional[str] = None,
        components_dir: Optional[str] = None,
        namespace: Optional[str] = None,
        ttl: Optional[int] = None,
        create_paths: Optional[bool] = None,
    ) -> None:
        overrides: Dict[str, Dict[str, Any]] = {"templates": {}, "cache": {}}
        templates = overrides["templates"]
        if template_paths is not None:
            templates["paths"] = [str(p) for p in template_paths]
        if layouts_dir is not None:
            templates["layouts_dir"] = layouts_dir
        if components_dir is not None:
            templates["components_dir"] = components_dir
        if create_paths is not None:
            templates["create_missing"] = bool(create_paths)

        cache = overrides["cache"]
        if cache_dir is not None:
            cache["directory"] = str(cache_dir)
        if namespace is not None:
            cache["namespace"] = namespace
        if ttl is not None:
            cache["ttl"] = int(ttl)

        self.engine = ModxEngine.from_config(
            repo_root,
            overrides={k: v for k, v in overrides.items() if v},
        )
        self._data: Dict[str, Any] = {}
        self._layout: Optional[str] = None

    def with_value(self, key: str, value: Any) -> "View":
        self._data[key] = value
        return self

    def with_data(self, data: Mapping[str, Any]) -> "View":
        self._data.update(data)
        return self

    def layout(self, name: str) -> "View":
        self._layout = name
        return self

    def render(self, name: str, ttl: Optional[int] = None) -> str:
        """Render ``name`` with the values and layout set on this view."""
        self.engine.with_data(self._data)
        if self._layout:
            self.engine.layout(self._layout)
        return self.engine.render(name, ttl)

    def clear_cache(self, name: Optional[str] = None) -> bool:
        return self.engine.clear_cache(name)


__all__ = ["View"]
