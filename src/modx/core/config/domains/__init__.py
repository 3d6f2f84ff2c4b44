"""Domain-specific configuration accessors."""
from __future__ import annotations

from .cache import CacheConfig
from .logging import LoggingConfig
from .render import RenderConfig
from .templates import TemplatesConfig

__all__ = [
    "CacheConfig",
    "LoggingConfig",
    "RenderConfig",
    "TemplatesConfig",
]
