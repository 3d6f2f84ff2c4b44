"""Render caching: fingerprinting, key derivation and stores."""
from __future__ import annotations

from .stores import CacheStore, FilesystemCacheStore, MemoryCacheStore, create_store
from .template_cache import TemplateCache, fingerprint_context

__all__ = [
    "CacheStore",
    "FilesystemCacheStore",
    "MemoryCacheStore",
    "TemplateCache",
    "create_store",
    "fingerprint_context",
]
