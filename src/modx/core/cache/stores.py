"""Key/value stores backing the render cache.

Stores only deal in opaque string keys and string values with an
optional TTL. Key derivation lives in ``template_cache``.
"""
from __future__ import annotations

import logging
import re
import threading
import time
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable, Dict, Optional, Tuple

from modx.core.exceptions import ConfigError
from modx.core.utils.io import ensure_directory, read_json, write_json_atomic

logger = logging.getLogger(__name__)

Clock = Callable[[], float]

_UNSAFE_KEY_CHARS = re.compile(r"[^A-Za-z0-9_.-]")
ENTRY_SUFFIX = ".cache.json"


def sanitize_key(key: str) -> str:
    """Replace every character outside ``[A-Za-z0-9_.-]`` with ``_``."""
    return _UNSAFE_KEY_CHARS.sub("_", key)


def _expiry(ttl: Optional[int], now: float) -> Optional[float]:
    if ttl is None or ttl <= 0:
        return None
    return now + ttl


class CacheStore(ABC):
    """Minimal store contract used by TemplateCache."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the live value for ``key`` or None."""
        ...

    @abstractmethod
    def put(self, key: str, value: str, ttl: Optional[int] = None) -> None:
        """Store ``value``; ``ttl`` of None or <= 0 never expires."""
        ...

    @abstractmethod
    def delete_all(self) -> bool:
        ...

    @abstractmethod
    def delete_by_prefix(self, prefix: str) -> bool:
        """Delete every key starting with ``prefix``; True when any was removed."""
        ...


class MemoryCacheStore(CacheStore):
    """Process-local store guarded by a lock."""

    def __init__(self, *, clock: Clock = time.time) -> None:
        self._entries: Dict[str, Tuple[str, Optional[float]]] = {}
        self._lock = threading.Lock()
        self._clock = clock

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            value, expires_at = entry
            if expires_at is not None and self._clock() >= expires_at:
                del self._entries[key]
                return None
            return value

    def put(self, key: str, value: str, ttl: Optional[int] = None) -> None:
        with self._lock:
            self._entries[key] = (value, _expiry(ttl, self._clock()))

    def delete_all(self) -> bool:
        with self._lock:
            self._entries.clear()
        return True

    def delete_by_prefix(self, prefix: str) -> bool:
        with self._lock:
            doomed = [k for k in self._entries if k.startswith(prefix)]
            for k in doomed:
                del self._entries[k]
        return bool(doomed)

    def __len__(self) -> int:
        return len(self._entries)


class FilesystemCacheStore(CacheStore):
    """One JSON file per entry under ``directory``.

    Entry files are written atomically and named ``<key>.cache.json`` with
    the key sanitized; only files with that suffix are ever deleted.
    """

    def __init__(self, directory: Path, *, clock: Clock = time.time) -> None:
        self.directory = Path(directory)
        self._clock = clock

    def _path(self, key: str) -> Path:
        return self.directory / f"{sanitize_key(key)}{ENTRY_SUFFIX}"

    def get(self, key: str) -> Optional[str]:
        path = self._path(key)
        try:
            payload = read_json(path, default=None)
        except ValueError:
            logger.warning("Discarding corrupt cache entry %s", path)
            path.unlink(missing_ok=True)
            return None
        if not isinstance(payload, dict) or not isinstance(payload.get("value"), str):
            return None
        expires_at = payload.get("expires_at")
        if expires_at is not None and self._clock() >= float(expires_at):
            path.unlink(missing_ok=True)
            return None
        return payload["value"]

    def put(self, key: str, value: str, ttl: Optional[int] = None) -> None:
        ensure_directory(self.directory)
        payload = {
            "key": key,
            "value": value,
            "expires_at": _expiry(ttl, self._clock()),
        }
        write_json_atomic(self._path(key), payload)

    def delete_all(self) -> bool:
        if not self.directory.exists():
            return True
        for path in self.directory.glob(f"*{ENTRY_SUFFIX}"):
            path.unlink(missing_ok=True)
        return True

    def delete_by_prefix(self, prefix: str) -> bool:
        if not self.directory.exists():
            return False
        removed = False
        for path in self.directory.glob(f"{sanitize_key(prefix)}*{ENTRY_SUFFIX}"):
            path.unlink(missing_ok=True)
            removed = True
        return removed


def create_store(kind: str, *, directory: Optional[Path] = None) -> CacheStore:
    """Build the store named by ``cache.store`` config."""
    normalized = (kind or "").strip().lower()
    if normalized == "memory":
        return MemoryCacheStore()
    if normalized == "filesystem":
        if directory is None:
            raise ConfigError("Filesystem cache store requires a directory")
        return FilesystemCacheStore(directory)
    raise ConfigError(f"Unknown cache store: {kind!r}", context={"store": kind})


__all__ = [
    "CacheStore",
    "MemoryCacheStore",
    "FilesystemCacheStore",
    "create_store",
    "sanitize_key",
]
