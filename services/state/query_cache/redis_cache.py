"""Redis-backed query cache."""

from __future__ import annotations

from redis.asyncio import Redis

from packages.persist_shared.errors import require_not_none
from services.state.query_cache.cache import QueryCache
from services.state.query_cache.fingerprint import QueryFingerprint


class RedisQueryCache(QueryCache):
    """Store serialized values under ``<prefix>:query:<digest>`` keys.

    Values are strings; callers own serialization. Redis failures propagate
    unchanged so a broken cache never masquerades as a miss.
    """

    def __init__(
        self,
        *,
        client: Redis,
        key_prefix: str = "persist",
        ttl_seconds: int | None = None,
    ) -> None:
        if key_prefix.strip() == "":
            raise ValueError("key_prefix must be non-empty")
        if ttl_seconds is not None and ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be > 0 when set")
        self._client = client
        self._key_prefix = key_prefix.strip()
        self._ttl_seconds = ttl_seconds

    def key_for(self, fingerprint: QueryFingerprint) -> str:
        """Return the Redis key addressing ``fingerprint``."""
        return f"{self._key_prefix}:query:{fingerprint.digest}"

    async def is_cached(self, fingerprint: QueryFingerprint) -> bool:
        key = self.key_for(require_not_none(fingerprint, "fingerprint"))
        return int(await self._client.exists(key)) > 0

    async def put(self, fingerprint: QueryFingerprint, value: str) -> None:
        """Cache ``value`` under ``fingerprint`` with the configured TTL."""
        key = self.key_for(require_not_none(fingerprint, "fingerprint"))
        await self._client.set(key, value, ex=self._ttl_seconds)

    async def get(self, fingerprint: QueryFingerprint) -> str | None:
        """Return the cached value or ``None`` when absent."""
        key = self.key_for(require_not_none(fingerprint, "fingerprint"))
        value = await self._client.get(key)
        return None if value is None else str(value)

    async def invalidate(self, fingerprint: QueryFingerprint) -> bool:
        """Drop one entry and return whether it existed."""
        key = self.key_for(require_not_none(fingerprint, "fingerprint"))
        return bool(await self._client.delete(key))
