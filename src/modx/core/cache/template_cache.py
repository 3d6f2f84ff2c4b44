"""Render cache keyed by template identity and data fingerprint."""
from __future__ import annotations

import hashlib
import json
import logging
from typing import Any, Callable, Mapping, Optional

from .stores import CacheStore, sanitize_key

logger = logging.getLogger(__name__)

DEFAULT_NAMESPACE = "template"
DEFAULT_TTL = 3600


def fingerprint_context(context: Mapping[str, Any], *, salt: str = "") -> str:
    """Deterministic SHA-256 digest of a data context.

    Serialization keeps insertion order, so two contexts holding the same
    pairs in a different order fingerprint differently. Values JSON cannot
    encode fall back to ``str()``.
    """
    payload = json.dumps(context, default=str, ensure_ascii=False)
    digest = hashlib.sha256()
    digest.update(payload.encode("utf-8"))
    if salt:
        digest.update(b"\x00")
        digest.update(salt.encode("utf-8"))
    return digest.hexdigest()


class TemplateCache:
    """Serve rendered output from a store, computing it on a miss.

    Usage:
        cache = TemplateCache(MemoryCacheStore())
        html = cache.get_or_render("page", fingerprint_context(data), lambda: render(data))
    """

    def __init__(
        self,
        store: CacheStore,
        *,
        namespace: str = DEFAULT_NAMESPACE,
        default_ttl: int = DEFAULT_TTL,
    ) -> None:
        self.store = store
        self.namespace = namespace
        self.default_ttl = default_ttl

    def cache_key(self, template_name: str, fingerprint: str) -> str:
        return sanitize_key(f"{self.namespace}_{template_name}_{fingerprint}")

    def template_prefix(self, template_name: str) -> str:
        return sanitize_key(f"{self.namespace}_{template_name}_")

    def get_or_render(
        self,
        template_name: str,
        fingerprint: str,
        compute: Callable[[], str],
        ttl: Optional[int] = None,
    ) -> str:
        """Return the cached render or compute, store and return it.

        Args:
            ttl: Seconds to keep the entry; None uses the default TTL and a
                value <= 0 never expires.
        """
        key = self.cache_key(template_name, fingerprint)
        cached = self.store.get(key)
        if cached is not None:
            logger.debug("Cache hit for %s", key)
            return cached

        logger.debug("Cache miss for %s", key)
        value = compute()
        if not value:
            # Empty output is never worth remembering.
            return value
        self.store.put(key, value, self.default_ttl if ttl is None else ttl)
        return value

    def clear(self, template_name: Optional[str] = None) -> bool:
        """Clear every entry, or entries of one template.

        Per-template clearing matches by key prefix, so clearing ``page``
        also removes entries of any template whose name extends
        ``page_`` (for example ``page_admin``).
        """
        if template_name is None:
            logger.debug("Clearing whole render cache")
            return self.store.delete_all()
        logger.debug("Clearing render cache for template %s", template_name)
        return self.store.delete_by_prefix(self.template_prefix(template_name))


__all__ = [
    "DEFAULT_NAMESPACE",
    "DEFAULT_TTL",
    "TemplateCache",
    "fingerprint_context",
]
