"""Tests for render cache stores."""
from __future__ import annotations

import json
from pathlib import Path

import pytest

from modx.core.cache import FilesystemCacheStore, MemoryCacheStore, create_store
from modx.core.cache.stores import ENTRY_SUFFIX, sanitize_key
from modx.core.exceptions import ConfigError


class FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture(params=["memory", "filesystem"])
def store_and_clock(request, tmp_path: Path):
    clock = FakeClock()
    if request.param == "memory":
        return MemoryCacheStore(clock=clock), clock
    return FilesystemCacheStore(tmp_path / "cache", clock=clock), clock


class TestStoreContract:
    def test_put_then_get(self, store_and_clock) -> None:
        store, _ = store_and_clock
        store.put("template_page_abc", "<p>hi</p>", 60)
        assert store.get("template_page_abc") == "<p>hi</p>"

    def test_missing_key(self, store_and_clock) -> None:
        store, _ = store_and_clock
        assert store.get("nope") is None

    def test_entry_expires_after_ttl(self, store_and_clock) -> None:
        store, clock = store_and_clock
        store.put("k", "v", 10)

        clock.now += 9
        assert store.get("k") == "v"
        clock.now += 1
        assert store.get("k") is None

    @pytest.mark.parametrize("ttl", [None, 0, -5])
    def test_non_positive_ttl_never_expires(self, store_and_clock, ttl) -> None:
        store, clock = store_and_clock
        store.put("k", "v", ttl)
        clock.now += 10**9
        assert store.get("k") == "v"

    def test_delete_by_prefix(self, store_and_clock) -> None:
        store, _ = store_and_clock
        store.put("template_page_1", "a")
        store.put("template_page_2", "b")
        store.put("template_other_1", "c")

        assert store.delete_by_prefix("template_page_") is True
        assert store.get("template_page_1") is None
        assert store.get("template_page_2") is None
        assert store.get("template_other_1") == "c"
        assert store.delete_by_prefix("template_page_") is False

    def test_delete_all(self, store_and_clock) -> None:
        store, _ = store_and_clock
        store.put("a", "1")
        store.put("b", "2")

        assert store.delete_all() is True
        assert store.get("a") is None and store.get("b") is None


class TestFilesystemCacheStore:
    def test_entry_file_layout(self, tmp_path: Path) -> None:
        store = FilesystemCacheStore(tmp_path, clock=FakeClock(100.0))
        store.put("template_a/b_fp", "out", 5)

        path = tmp_path / f"template_a_b_fp{ENTRY_SUFFIX}"
        payload = json.loads(path.read_text(encoding="utf-8"))
        assert payload == {"key": "template_a/b_fp", "value": "out", "expires_at": 105.0}

    def test_corrupt_entry_is_discarded(self, tmp_path: Path) -> None:
        store = FilesystemCacheStore(tmp_path)
        path = tmp_path / f"k{ENTRY_SUFFIX}"
        path.write_text("{not json", encoding="utf-8")

        assert store.get("k") is None
        assert not path.exists()

    def test_expired_entry_file_is_removed(self, tmp_path: Path) -> None:
        clock = FakeClock()
        store = FilesystemCacheStore(tmp_path, clock=clock)
        store.put("k", "v", 1)
        clock.now += 5

        assert store.get("k") is None
        assert not (tmp_path / f"k{ENTRY_SUFFIX}").exists()

    def test_delete_all_leaves_foreign_files(self, tmp_path: Path) -> None:
        store = FilesystemCacheStore(tmp_path)
        store.put("k", "v")
        keep = tmp_path / "notes.txt"
        keep.write_text("mine", encoding="utf-8")

        store.delete_all()
        assert keep.exists()
        assert list(tmp_path.glob(f"*{ENTRY_SUFFIX}")) == []

    def test_missing_directory_is_harmless(self, tmp_path: Path) -> None:
        store = FilesystemCacheStore(tmp_path / "absent")
        assert store.get("k") is None
        assert store.delete_all() is True
        assert store.delete_by_prefix("k") is False


class TestHelpers:
    def test_sanitize_key(self) -> None:
        assert sanitize_key("template_emails/welcome_ab.c-d") == "template_emails_welcome_ab.c-d"
        assert sanitize_key("a b:c") == "a_b_c"

    def test_create_store(self, tmp_path: Path) -> None:
        assert isinstance(create_store("memory"), MemoryCacheStore)
        assert isinstance(create_store("Filesystem", directory=tmp_path), FilesystemCacheStore)

    def test_create_store_rejects_unknown_kind(self) -> None:
        with pytest.raises(ConfigError):
            create_store("redis")

    def test_filesystem_store_needs_directory(self) -> None:
        with pytest.raises(ConfigError):
            create_store("filesystem")
