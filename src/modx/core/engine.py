"""Rendering facade: locator + compiler + executor + render cache.

Usage:
    engine = ModxEngine(TemplateLocator([Path("templates")]))
    html = engine.set("title", "Hi").with_data({"items": ["a", "b"]}).render("page")
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from modx.core.cache import TemplateCache, create_store, fingerprint_context
from modx.core.compiler import CompiledTemplate, TemplateCompiler
from modx.core.compiler.engine import DEFAULT_MAX_ITERATIONS
from modx.core.config import ConfigManager
from modx.core.config.domains import CacheConfig, RenderConfig, TemplatesConfig
from modx.core.environment import TemplateLocator
from modx.core.exceptions import EmptyOutputError
from modx.core.runtime import JinjaExecutor
from modx.core.utils.io import write_text
from modx.core.utils.merge import deep_merge

logger = logging.getLogger(__name__)

COMPILED_SUFFIX = ".jinja"


def cache_from_config(cache_cfg: CacheConfig) -> Optional[TemplateCache]:
    """Build the render cache described by ``cache.*`` config, or None when disabled."""
    if not cache_cfg.enabled:
        return None
    store = create_store(cache_cfg.store, directory=cache_cfg.directory)
    return TemplateCache(store, namespace=cache_cfg.namespace, default_ttl=cache_cfg.ttl)


class ModxEngine:
    """Compile, execute and cache templates.

    Data set through ``set``/``with_data`` is snapshotted at the start of
    every ``render`` so one render never sees later mutations.
    """

    def __init__(
        self,
        locator: TemplateLocator,
        *,
        cache: Optional[TemplateCache] = None,
        executor: Optional[JinjaExecutor] = None,
        max_iterations: int = DEFAULT_MAX_ITERATIONS,
        default_layout: Optional[str] = None,
        dump_dir: Optional[Path] = None,
    ) -> None:
        self.locator = locator
        self.compiler = TemplateCompiler(locator, max_iterations=max_iterations)
        self.executor = executor or JinjaExecutor()
        self.cache = cache
        self.dump_dir = Path(dump_dir) if dump_dir else None
        self._data: Dict[str, Any] = {}
        self._layout = default_layout

    @classmethod
    def from_config(
        cls,
        repo_root: Optional[Path] = None,
        *,
        overrides: Optional[Mapping[str, Any]] = None,
    ) -> "ModxEngine":
        """Build an engine from layered configuration.

        Args:
            repo_root: Project root; auto-detected when None
            overrides: Config mapping deep-merged over the loaded config
        """
        manager = ConfigManager(repo_root)
        config = manager.load_config()
        if overrides:
            config = deep_merge(config, dict(overrides))
            manager.validate_schema(config)

        root = manager.repo_root
        templates = TemplatesConfig(root, config=config)
        cache_cfg = CacheConfig(root, config=config)
        render_cfg = RenderConfig(root, config=config)

        locator = TemplateLocator.from_paths(
            templates.paths,
            root=root,
            create=templates.create_missing,
            extension=templates.extension,
            layouts_dir=templates.layouts_dir,
            components_dir=templates.components_dir,
        )

        return cls(
            locator,
            cache=cache_from_config(cache_cfg),
            max_iterations=templates.max_iterations,
            default_layout=templates.default_layout,
            dump_dir=render_cfg.dump_dir,
        )

    # ========== Chaining API ==========

    def set(self, key: str, value: Any) -> "ModxEngine":
        self._data[key] = value
        return self

    def with_data(self, data: Mapping[str, Any]) -> "ModxEngine":
        self._data.update(data)
        return self

    def layout(self, name: Optional[str]) -> "ModxEngine":
        """Use ``name`` as the layout for templates that declare none."""
        self._layout = name
        return self

    @property
    def data(self) -> Dict[str, Any]:
        return dict(self._data)

    # ========== Rendering ==========

    def compile(self, name: str) -> CompiledTemplate:
        """Compile ``name`` against the current data without executing it."""
        return self.compiler.compile(name, dict(self._data), layout=self._layout)

    def render(self, name: str, ttl: Optional[int] = None) -> str:
        """Render ``name``, serving from the cache when possible.

        Raises:
            TemplateNotFoundError: a template, layout or component is missing
            ExpansionLimitError: expansion never settled
            RenderExecutionError: the compiled source failed to execute
            EmptyOutputError: the render produced no output
        """
        data = dict(self._data)
        layout = self._layout

        def compute() -> str:
            return self._render_uncached(name, data, layout)

        if self.cache is None:
            return compute()
        fingerprint = fingerprint_context(data, salt=layout or "")
        return self.cache.get_or_render(name, fingerprint, compute, ttl=ttl)

    def _render_uncached(self, name: str, data: Dict[str, Any], layout: Optional[str]) -> str:
        compiled = self.compiler.compile(name, data, layout=layout)
        if self.dump_dir is not None:
            self._dump(compiled)

        output = self.executor.execute(compiled.source, data, name=name)
        if not output:
            raise EmptyOutputError(
                f"Template '{name}' rendered empty output",
                context={"template": name, "path": str(compiled.path)},
            )
        return output

    def _dump(self, compiled: CompiledTemplate) -> None:
        assert self.dump_dir is not None
        target = self.dump_dir / f"{compiled.name}{COMPILED_SUFFIX}"
        write_text(target, compiled.source)
        logger.debug("Wrote compiled source for '%s' to %s", compiled.name, target)

    def clear_cache(self, name: Optional[str] = None) -> bool:
        """Clear all cached renders, or those of template ``name``."""
        if self.cache is None:
            return False
        return self.cache.clear(name)


__all__ = ["ModxEngine", "cache_from_config"]
