"""Tests for TemplateCache and context fingerprinting."""
from __future__ import annotations

from typing import List

from modx.core.cache import MemoryCacheStore, TemplateCache, fingerprint_context


class Counter:
    def __init__(self, value: str = "<p>out</p>") -> None:
        self.calls = 0
        self.value = value

    def __call__(self) -> str:
        self.calls += 1
        return self.value


class Clock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class TestFingerprint:
    def test_same_context_same_fingerprint(self) -> None:
        assert fingerprint_context({"a": 1, "b": [1, 2]}) == fingerprint_context({"a": 1, "b": [1, 2]})

    def test_different_values_differ(self) -> None:
        assert fingerprint_context({"a": 1}) != fingerprint_context({"a": 2})

    def test_insertion_order_matters(self) -> None:
        assert fingerprint_context({"a": 1, "b": 2}) != fingerprint_context({"b": 2, "a": 1})

    def test_salt_changes_fingerprint(self) -> None:
        assert fingerprint_context({}, salt="main") != fingerprint_context({})

    def test_unserializable_values_fall_back_to_str(self) -> None:
        class Thing:
            def __str__(self) -> str:
                return "thing"

        assert fingerprint_context({"t": Thing()}) == fingerprint_context({"t": "thing"})


class TestTemplateCache:
    def test_key_shape(self) -> None:
        cache = TemplateCache(MemoryCacheStore(), namespace="site")
        assert cache.cache_key("emails/welcome", "abc") == "site_emails_welcome_abc"

    def test_computes_once_per_fingerprint(self) -> None:
        cache = TemplateCache(MemoryCacheStore())
        compute = Counter()

        assert cache.get_or_render("page", "fp", compute) == "<p>out</p>"
        assert cache.get_or_render("page", "fp", compute) == "<p>out</p>"
        assert compute.calls == 1

        cache.get_or_render("page", "other", compute)
        assert compute.calls == 2

    def test_empty_output_is_not_stored(self) -> None:
        store = MemoryCacheStore()
        cache = TemplateCache(store)
        compute = Counter("")

        assert cache.get_or_render("page", "fp", compute) == ""
        assert cache.get_or_render("page", "fp", compute) == ""
        assert compute.calls == 2
        assert len(store) == 0

    def test_default_ttl_applies_when_none_given(self) -> None:
        clock = Clock()
        cache = TemplateCache(MemoryCacheStore(clock=clock), default_ttl=100)
        compute = Counter()

        cache.get_or_render("page", "fp", compute)
        clock.now = 99
        cache.get_or_render("page", "fp", compute)
        assert compute.calls == 1

        clock.now = 100
        cache.get_or_render("page", "fp", compute)
        assert compute.calls == 2

    def test_explicit_ttl_overrides_default(self) -> None:
        clock = Clock()
        cache = TemplateCache(MemoryCacheStore(clock=clock), default_ttl=100)
        compute = Counter()

        cache.get_or_render("page", "fp", compute, ttl=5)
        clock.now = 6
        cache.get_or_render("page", "fp", compute, ttl=5)
        assert compute.calls == 2

    def test_non_positive_ttl_never_expires(self) -> None:
        clock = Clock()
        cache = TemplateCache(MemoryCacheStore(clock=clock), default_ttl=1)
        compute = Counter()

        cache.get_or_render("page", "fp", compute, ttl=0)
        clock.now = 10**9
        cache.get_or_render("page", "fp", compute, ttl=0)
        assert compute.calls == 1

    def test_clear_one_template(self) -> None:
        cache = TemplateCache(MemoryCacheStore())
        seen: List[str] = []
        for name in ("page", "home"):
            cache.get_or_render(name, "fp", lambda n=name: seen.append(n) or n)

        assert cache.clear("page") is True
        cache.get_or_render("page", "fp", lambda: seen.append("page") or "page")
        cache.get_or_render("home", "fp", lambda: seen.append("home") or "home")
        assert seen == ["page", "home", "page"]

    def test_clear_one_template_also_matches_longer_names(self) -> None:
        store = MemoryCacheStore()
        cache = TemplateCache(store)
        cache.get_or_render("page", "fp", lambda: "a")
        cache.get_or_render("page_admin", "fp", lambda: "b")

        cache.clear("page")
        assert len(store) == 0

    def test_clear_all(self) -> None:
        store = MemoryCacheStore()
        cache = TemplateCache(store)
        cache.get_or_render("a", "fp", lambda: "1")
        cache.get_or_render("b", "fp", lambda: "2")

        assert cache.clear() is True
        assert len(store) == 0
