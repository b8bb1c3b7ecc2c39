"""Query-result caching layer package exports."""

from services.state.query_cache.by_id import (
    DeletingByIdConnector,
    GettingByIdConnector,
    TableByIdConnector,
)
from services.state.query_cache.cache import InMemoryQueryCache, QueryCache
from services.state.query_cache.config import (
    SERVICE_COMPONENT_ID,
    QueryCacheSettings,
    resolve_query_cache_settings,
)
from services.state.query_cache.connector import CachingQueryConnector, RowProjector
from services.state.query_cache.fingerprint import QueryFingerprint
from services.state.query_cache.guard import single_or_none
from services.state.query_cache.outcome import CacheHit, Computed, QueryOutcome
from services.state.query_cache.service import (
    build_caching_connector,
    build_connection_provider,
    build_query_cache,
)

__all__ = [
    "SERVICE_COMPONENT_ID",
    "CacheHit",
    "CachingQueryConnector",
    "Computed",
    "DeletingByIdConnector",
    "GettingByIdConnector",
    "InMemoryQueryCache",
    "QueryCache",
    "QueryCacheSettings",
    "QueryFingerprint",
    "QueryOutcome",
    "RowProjector",
    "TableByIdConnector",
    "build_caching_connector",
    "build_connection_provider",
    "build_query_cache",
    "resolve_query_cache_settings",
    "single_or_none",
]
