# tests/managers/test_ttl_cache.py
"""Tests for app/managers/ttl_cache.py module."""

import pytest

from app.managers.ttl_cache import TTLCache


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> TTLCache[str]:
    return TTLCache(10, name="test", clock=clock)


class TestTTLCacheGetSet:
    """Tests for storing and reading entries."""

    def test_get_missing_key_returns_none(self, cache: TTLCache[str]) -> None:
        assert cache.get("absent") is None

    def test_set_then_get_returns_value(self, cache: TTLCache[str]) -> None:
        cache.set("key", "value")
        assert cache.get("key") == "value"

    def test_entry_is_served_before_ttl(self, cache: TTLCache[str], clock: FakeClock) -> None:
        cache.set("key", "value")
        clock.advance(9.9)
        assert cache.get("key") == "value"

    def test_entry_expires_at_ttl(self, cache: TTLCache[str], clock: FakeClock) -> None:
        """A stale entry is dropped when read."""
        cache.set("key", "value")
        clock.advance(10)

        assert cache.get("key") is None
        assert len(cache) == 0

    def test_set_restarts_lifetime(self, cache: TTLCache[str], clock: FakeClock) -> None:
        cache.set("key", "old")
        clock.advance(8)
        cache.set("key", "new")
        clock.advance(8)

        assert cache.get("key") == "new"

    def test_contains_respects_expiry(self, cache: TTLCache[str], clock: FakeClock) -> None:
        cache.set("key", "value")
        assert "key" in cache

        clock.advance(11)
        assert "key" not in cache
        assert 42 not in cache


class TestTTLCacheInvalidate:
    """Tests for invalidate()."""

    def test_invalidate_single_key(self, cache: TTLCache[str]) -> None:
        cache.set("a", "1")
        cache.set("b", "2")

        cache.invalidate("a")

        assert cache.get("a") is None
        assert cache.get("b") == "2"

    def test_invalidate_unknown_key_is_noop(self, cache: TTLCache[str]) -> None:
        cache.set("a", "1")
        cache.invalidate("zzz")
        assert len(cache) == 1

    def test_invalidate_all(self, cache: TTLCache[str]) -> None:
        cache.set("a", "1")
        cache.set("b", "2")

        cache.invalidate()

        assert len(cache) == 0


class TestTTLCacheConstruction:
    def test_rejects_non_positive_ttl(self) -> None:
        with pytest.raises(ValueError, match="ttl must be positive"):
            TTLCache(0)

    def test_uses_name_and_ttl(self) -> None:
        cache: TTLCache[int] = TTLCache(30, name="posts")
        assert cache.name == "posts"
        assert cache.ttl == 30
