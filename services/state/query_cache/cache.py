"""Cache presence contract and process-local backend."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Generic, Protocol, TypeVar

from packages.persist_shared.errors import require_not_none
from services.state.query_cache.fingerprint import QueryFingerprint

V = TypeVar("V")


class QueryCache(Protocol):
    """Presence check consulted before executing a query.

    Connectors only ever call ``is_cached``; populating the cache after a
    ``Computed`` outcome is the caller's responsibility.
    """

    async def is_cached(self, fingerprint: QueryFingerprint) -> bool:
        """Return whether a value is cached for ``fingerprint``."""


@dataclass(frozen=True)
class _Entry(Generic[V]):
    value: V
    expires_at: float | None


class InMemoryQueryCache(QueryCache, Generic[V]):
    """Process-local value store keyed by fingerprint with optional TTL."""

    def __init__(
        self,
        *,
        ttl_seconds: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl_seconds is not None and ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be > 0 when set")
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[QueryFingerprint, _Entry[V]] = {}

    async def is_cached(self, fingerprint: QueryFingerprint) -> bool:
        return self._live_entry(require_not_none(fingerprint, "fingerprint")) is not None

    def put(self, fingerprint: QueryFingerprint, value: V) -> None:
        """Cache ``value`` under ``fingerprint``, replacing any previous value."""
        require_not_none(fingerprint, "fingerprint")
        expires_at = (
            None if self._ttl_seconds is None else self._clock() + self._ttl_seconds
        )
        self._entries[fingerprint] = _Entry(value=value, expires_at=expires_at)

    def get(self, fingerprint: QueryFingerprint) -> V:
        """Return the cached value; raises ``KeyError`` when absent or expired."""
        entry = self._live_entry(require_not_none(fingerprint, "fingerprint"))
        if entry is None:
            raise KeyError(str(fingerprint))
        return entry.value

    def invalidate(self, fingerprint: QueryFingerprint) -> bool:
        """Drop one entry and return whether a live value was cached."""
        live = self._live_entry(require_not_none(fingerprint, "fingerprint"))
        self._entries.pop(fingerprint, None)
        return live is not None

    def clear(self) -> None:
        """Drop every entry."""
        self._entries.clear()

    def __len__(self) -> int:
        return sum(
            1 for fingerprint in list(self._entries) if self._live_entry(fingerprint)
        )

    def _live_entry(self, fingerprint: QueryFingerprint) -> _Entry[V] | None:
        entry = self._entries.get(fingerprint)
        if entry is None:
            return None
        if entry.expires_at is not None and entry.expires_at <= self._clock():
            del self._entries[fingerprint]
            return None
        return entry
