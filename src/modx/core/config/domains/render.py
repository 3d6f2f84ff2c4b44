"""Domain-specific configuration for render-time options."""
from __future__ import annotations

from functools import cached_property
from pathlib import Path
from typing import Optional

from ..base import BaseDomainConfig


class RenderConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "render"

    @cached_property
    def dump_compiled(self) -> bool:
        return bool(self.section.get("dump_compiled", False))

    @cached_property
    def dump_dir(self) -> Optional[Path]:
        """Directory for compiled-text dumps, or None when dumping is off."""
        if not self.dump_compiled:
            return None
        return self._resolve(str(self.section.get("dump_dir", ".modx/compiled")))


__all__ = ["RenderConfig"]
