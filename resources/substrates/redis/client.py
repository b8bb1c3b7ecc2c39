"""Async Redis client construction."""

from __future__ import annotations

from redis.asyncio import Redis

from resources.substrates.redis.config import RedisSettings


def create_redis_client(settings: RedisSettings) -> Redis:
    """Construct a configured ``redis.asyncio`` client with string responses."""
    return Redis.from_url(
        settings.url or "",
        socket_connect_timeout=settings.connect_timeout_seconds,
        socket_timeout=settings.socket_timeout_seconds,
        max_connections=settings.max_connections,
        decode_responses=True,
        encoding="utf-8",
    )
