"""Caching query connector.

``CachingQueryConnector`` decides, per query fingerprint, whether the caller
already holds a cached value (``CacheHit``) or whether the query must run and a
fresh value be returned for the caller to cache (``Computed``).

Concurrent misses for the same fingerprint are not deduplicated: each one
executes the query and returns its own ``Computed`` outcome.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable, Generic, TypeVar

from packages.persist_shared.errors import require_not_none
from packages.persist_shared.logging import fields, get_logger, log_context
from resources.substrates.postgres.executor import QueryExecutor, Row
from services.state.query_cache.cache import QueryCache
from services.state.query_cache.fingerprint import QueryFingerprint
from services.state.query_cache.guard import single_or_none
from services.state.query_cache.outcome import CacheHit, Computed, QueryOutcome

_LOGGER = get_logger(__name__)

TEntity = TypeVar("TEntity")

RowProjector = Callable[[Row], TEntity]


class CachingQueryConnector(Generic[TEntity]):
    """Retrieve entities through a cache check, an executor, and a row projector."""

    def __init__(
        self,
        *,
        executor: QueryExecutor,
        cache: QueryCache,
        projector: RowProjector[TEntity],
        entity_type: str | None = None,
    ) -> None:
        self._executor = require_not_none(executor, "executor")
        self._cache = require_not_none(cache, "cache")
        self._projector = require_not_none(projector, "projector")
        self._entity_type = entity_type or _callable_name(projector)

    @property
    def entity_type(self) -> str:
        """Return the entity name used in logs and errors."""
        return self._entity_type

    async def get_entity(
        self, sql: str, parameters: Mapping[str, Any] | None = None
    ) -> QueryOutcome[TEntity | None]:
        """Retrieve at most one entity.

        Returns ``Computed(fingerprint, None)`` when the query yields no rows and
        raises ``TooManyRowsError`` when it yields more than one.
        """
        fingerprint = QueryFingerprint.from_query(sql)
        if await self._cache_hit(fingerprint):
            return CacheHit(fingerprint)

        entities = await self._project(sql, parameters)
        return Computed(
            fingerprint, single_or_none(entities, entity_type=self._entity_type)
        )

    async def get_entities(
        self, sql: str, parameters: Mapping[str, Any] | None = None
    ) -> QueryOutcome[tuple[TEntity, ...]]:
        """Retrieve every entity in data-store row order."""
        fingerprint = QueryFingerprint.from_query(sql)
        if await self._cache_hit(fingerprint):
            return CacheHit(fingerprint)

        return Computed(fingerprint, await self._project(sql, parameters))

    async def _cache_hit(self, fingerprint: QueryFingerprint) -> bool:
        cached = await self._cache.is_cached(fingerprint)
        with log_context(
            {
                fields.FINGERPRINT: fingerprint,
                fields.ENTITY_TYPE: self._entity_type,
                fields.CACHE_OUTCOME: "hit" if cached else "miss",
            }
        ):
            _LOGGER.debug("Query cache consulted")
        return cached

    async def _project(
        self, sql: str, parameters: Mapping[str, Any] | None
    ) -> tuple[TEntity, ...]:
        rows = await self._executor.fetch_rows(sql, dict(parameters or {}))
        return tuple(self._projector(row) for row in rows)


def _callable_name(projector: Callable[..., Any]) -> str:
    qualname = getattr(projector, "__qualname__", None)
    if qualname is None:
        return type(projector).__qualname__
    return f"{getattr(projector, '__module__', '')}.{qualname}".lstrip(".")
