"""Redis substrate used by the Redis-backed query cache."""

from resources.substrates.redis.client import create_redis_client
from resources.substrates.redis.config import (
    RESOURCE_COMPONENT_ID,
    RedisSettings,
    resolve_redis_settings,
)

__all__ = [
    "RESOURCE_COMPONENT_ID",
    "RedisSettings",
    "create_redis_client",
    "resolve_redis_settings",
]
