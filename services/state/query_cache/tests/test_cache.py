"""Tests for the in-memory query cache."""

from __future__ import annotations

import pytest

from services.state.query_cache.cache import InMemoryQueryCache
from services.state.query_cache.fingerprint import QueryFingerprint

_QUERY = QueryFingerprint.from_query("SELECT * FROM orders")


class _FakeClock:
    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


@pytest.mark.asyncio
async def test_put_then_lookup() -> None:
    """Stored values should be visible through is_cached and get."""
    cache: InMemoryQueryCache[list[int]] = InMemoryQueryCache()
    assert await cache.is_cached(_QUERY) is False

    cache.put(_QUERY, [1, 2])

    assert await cache.is_cached(_QUERY) is True
    assert await cache.is_cached(QueryFingerprint.from_query("SELECT * FROM orders"))
    assert cache.get(_QUERY) == [1, 2]
    assert len(cache) == 1


@pytest.mark.asyncio
async def test_entries_expire_after_ttl() -> None:
    """Expired entries should read as absent and be evicted."""
    clock = _FakeClock()
    cache: InMemoryQueryCache[str] = InMemoryQueryCache(ttl_seconds=10, clock=clock)
    cache.put(_QUERY, "value")

    clock.now = 109.0
    assert await cache.is_cached(_QUERY) is True

    clock.now = 110.0
    assert await cache.is_cached(_QUERY) is False
    with pytest.raises(KeyError):
        cache.get(_QUERY)
    assert len(cache) == 0


def test_invalidate_and_clear() -> None:
    cache: InMemoryQueryCache[int] = InMemoryQueryCache()
    cache.put(_QUERY, 1)
    other = QueryFingerprint.from_query("SELECT 2")
    cache.put(other, 2)

    assert cache.invalidate(_QUERY) is True
    assert cache.invalidate(_QUERY) is False
    assert len(cache) == 1

    cache.clear()
    assert len(cache) == 0


def test_non_positive_ttl_is_rejected() -> None:
    with pytest.raises(ValueError, match="ttl_seconds"):
        InMemoryQueryCache(ttl_seconds=0)


def test_invalidate_reports_expired_entry_as_absent() -> None:
    """Invalidation agrees with is_cached about expired entries."""
    clock = _FakeClock()
    cache: InMemoryQueryCache[str] = InMemoryQueryCache(ttl_seconds=1, clock=clock)
    cache.put(_QUERY, "value")

    clock.now = 105.0

    assert cache.invalidate(_QUERY) is False
    assert len(cache) == 0
