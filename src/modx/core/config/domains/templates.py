"""Domain-specific configuration for template lookup and expansion."""
from __future__ import annotations

from functools import cached_property
from pathlib import Path
from typing import List, Optional

from ..base import BaseDomainConfig


class TemplatesConfig(BaseDomainConfig):
    """Accessors for the ``templates`` section."""

    def _config_section(self) -> str:
        return "templates"

    @cached_property
    def paths(self) -> List[Path]:
        """Template directories in search order, resolved against the repo root."""
        raw = self.section.get("paths") or []
        return [self._resolve(str(p)) for p in raw]

    @cached_property
    def extension(self) -> str:
        return str(self.section.get("extension", ".modx"))

    @cached_property
    def layouts_dir(self) -> str:
        return str(self.section.get("layouts_dir", "layouts"))

    @cached_property
    def components_dir(self) -> str:
        return str(self.section.get("components_dir", "components"))

    @cached_property
    def create_missing(self) -> bool:
        return bool(self.section.get("create_missing", False))

    @cached_property
    def max_iterations(self) -> int:
        return int(self.section.get("max_iterations", 100))

    @cached_property
    def default_layout(self) -> Optional[str]:
        value = self.section.get("default_layout")
        return str(value) if value else None


__all__ = ["TemplatesConfig"]
