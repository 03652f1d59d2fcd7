"""Tests for boardz/cache.py: timed read-through cache."""

from __future__ import annotations

from unittest.mock import Mock

from boardz.cache import CacheEntry, TimedCache


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


class TestCacheEntry:
    def test_fresh_before_expiry(self):
        assert CacheEntry("v", expires_at=10.0).is_fresh(9.99)

    def test_stale_at_expiry(self):
        assert not CacheEntry("v", expires_at=10.0).is_fresh(10.0)


class TestTimedCache:
    def test_get_or_load_calls_loader_once_while_fresh(self):
        clock = FakeClock()
        cache = TimedCache(10, clock)
        loader = Mock(return_value=["a"])

        assert cache.get_or_load("components", loader) == ["a"]
        clock.now = 9.5
        assert cache.get_or_load("components", loader) == ["a"]
        assert loader.call_count == 1

    def test_reloads_after_expiry(self):
        clock = FakeClock()
        cache = TimedCache(10, clock)
        loader = Mock(side_effect=[["a"], ["a", "b"]])

        cache.get_or_load("components", loader)
        clock.now = 10.0
        assert cache.get_or_load("components", loader) == ["a", "b"]
        assert loader.call_count == 2

    def test_zero_ttl_never_caches(self):
        cache = TimedCache(0, FakeClock())
        loader = Mock(return_value=["a"])

        cache.get_or_load("components", loader)
        cache.get_or_load("components", loader)
        assert loader.call_count == 2

    def test_invalidate_single_key(self):
        cache = TimedCache(10, FakeClock())
        cache.set("components", ["a"])
        cache.set("page_configs", ["p"])

        cache.invalidate("components")

        assert cache.get("components") is None
        assert cache.get("page_configs") == ["p"]

    def test_invalidate_everything(self):
        cache = TimedCache(10, FakeClock())
        cache.set("components", ["a"])
        cache.set("page_configs", ["p"])

        cache.invalidate()

        assert cache.get("components") is None
        assert cache.get("page_configs") is None
