"""Domain-specific configuration for the render cache."""
from __future__ import annotations

from functools import cached_property
from pathlib import Path

from ..base import BaseDomainConfig


class CacheConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "cache"

    @cached_property
    def enabled(self) -> bool:
        return bool(self.section.get("enabled", True))

    @cached_property
    def store(self) -> str:
        return str(self.section.get("store", "filesystem")).strip().lower()

    @cached_property
    def directory(self) -> Path:
        return self._resolve(str(self.section.get("directory", ".modx/cache")))

    @cached_property
    def namespace(self) -> str:
        return str(self.section.get("namespace", "template"))

    @cached_property
    def ttl(self) -> int:
        return int(self.section.get("ttl", 3600))


__all__ = ["CacheConfig"]
