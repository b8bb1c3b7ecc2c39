"""Wiring helpers building query caches and connectors from settings."""

from __future__ import annotations

from redis.asyncio import Redis

from packages.persist_shared.config import (
    PersistSettings,
    SettingsConnectionStringProvider,
)
from packages.persist_shared.logging import get_logger
from resources.substrates.postgres import (
    ConnectionProvider,
    EngineQueryExecutor,
    resolve_postgres_settings,
)
from resources.substrates.redis import create_redis_client, resolve_redis_settings
from services.state.query_cache.cache import InMemoryQueryCache, QueryCache
from services.state.query_cache.config import resolve_query_cache_settings
from services.state.query_cache.connector import (
    CachingQueryConnector,
    RowProjector,
    TEntity,
)
from services.state.query_cache.redis_cache import RedisQueryCache

_LOGGER = get_logger(__name__)


def build_query_cache(
    settings: PersistSettings, *, redis_client: Redis | None = None
) -> QueryCache:
    """Instantiate the configured cache backend."""
    cache_settings = resolve_query_cache_settings(settings)

    if cache_settings.backend == "memory":
        _LOGGER.info("Using in-memory query cache")
        return InMemoryQueryCache(ttl_seconds=cache_settings.ttl_seconds)

    _LOGGER.info("Using Redis query cache")
    if redis_client is None:
        redis_client = create_redis_client(resolve_redis_settings(settings))
    return RedisQueryCache(
        client=redis_client,
        key_prefix=cache_settings.key_prefix,
        ttl_seconds=cache_settings.ttl_seconds,
    )


def build_connection_provider(settings: PersistSettings) -> ConnectionProvider:
    """Build a keyed engine provider from ``connection_strings`` and pool settings."""
    return ConnectionProvider(
        settings=resolve_postgres_settings(settings),
        connection_strings=SettingsConnectionStringProvider(settings),
    )


def build_caching_connector(
    settings: PersistSettings,
    *,
    projector: RowProjector[TEntity],
    cache: QueryCache,
    connections: ConnectionProvider,
    entity_type: str | None = None,
) -> CachingQueryConnector[TEntity]:
    """Build a connector on the configured connection key."""
    cache_settings = resolve_query_cache_settings(settings)
    return CachingQueryConnector(
        executor=EngineQueryExecutor(
            connections=connections,
            connection_key=cache_settings.connection_key,
        ),
        cache=cache,
        projector=projector,
        entity_type=entity_type,
    )
