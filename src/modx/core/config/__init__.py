"""modx configuration system.

Usage:
    from modx.core.config import ConfigManager
    from modx.core.config.domains import CacheConfig, TemplatesConfig

    manager = ConfigManager(repo_root=Path("/path/to/project"))
    config = manager.load_config()

    templates = TemplatesConfig(repo_root=Path("/path/to/project"))
    search_paths = templates.paths
"""
from __future__ import annotations

from .manager import ConfigManager
from .cache import get_cached_config, clear_all_caches, is_cached
from .base import BaseDomainConfig
from .domains import CacheConfig, LoggingConfig, RenderConfig, TemplatesConfig

__all__ = [
    "ConfigManager",
    "BaseDomainConfig",
    "get_cached_config",
    "clear_all_caches",
    "is_cached",
    "CacheConfig",
    "LoggingConfig",
    "RenderConfig",
    "TemplatesConfig",
]
