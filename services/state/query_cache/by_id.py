"""Identifier-keyed connectors over one table."""

from __future__ import annotations

import re
from typing import Protocol, TypeVar

from packages.persist_shared.errors import require_not_none
from packages.persist_shared.ids import BinaryId
from packages.persist_shared.logging import fields, get_logger, log_context
from resources.substrates.postgres.executor import QueryExecutor
from services.state.query_cache.connector import CachingQueryConnector
from services.state.query_cache.outcome import QueryOutcome

_LOGGER = get_logger(__name__)

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)?$")

TEntity = TypeVar("TEntity")
TEntity_co = TypeVar("TEntity_co", covariant=True)


class GettingByIdConnector(Protocol[TEntity_co]):
    """Retrieve one entity by identifier through the query cache."""

    async def get_by_id(self, id: BinaryId) -> QueryOutcome[TEntity_co | None]:
        """Return the outcome for the entity with ``id``."""


class DeletingByIdConnector(Protocol):
    """Delete one entity by identifier."""

    async def delete_by_id(self, id: BinaryId) -> None:
        """Delete the entity with ``id``; deleting a missing entity is a no-op."""


class TableByIdConnector(GettingByIdConnector[TEntity], DeletingByIdConnector):
    """Get and delete rows of one table by a 16-byte identifier column.

    Fingerprints ignore bound parameters, so the select text carries the
    canonical id in a trailing comment. Each id then owns its own cache slot
    while the value itself is still sent as a bound parameter.
    """

    def __init__(
        self,
        *,
        connector: CachingQueryConnector[TEntity],
        executor: QueryExecutor,
        table: str,
        id_column: str = "id",
    ) -> None:
        self._connector = require_not_none(connector, "connector")
        self._executor = require_not_none(executor, "executor")
        self._table = _require_identifier(table, "table")
        self._id_column = _require_identifier(id_column, "id_column")

    def select_sql(self, id: BinaryId) -> str:
        """Return the select text whose fingerprint addresses ``id``."""
        return (
            f"SELECT * FROM {self._table} "
            f"WHERE {self._id_column} = :id /* {self._id_column}={id} */"
        )

    async def get_by_id(self, id: BinaryId) -> QueryOutcome[TEntity | None]:
        require_not_none(id, "id")
        return await self._connector.get_entity(
            self.select_sql(id), {"id": id.to_bytes()}
        )

    async def delete_by_id(self, id: BinaryId) -> None:
        require_not_none(id, "id")
        deleted = await self._executor.execute(
            f"DELETE FROM {self._table} WHERE {self._id_column} = :id",
            {"id": id.to_bytes()},
        )
        with log_context(
            {fields.ENTITY_TYPE: self._connector.entity_type, fields.ROW_COUNT: deleted}
        ):
            _LOGGER.debug("Deleted entity by id")


def _require_identifier(value: str, name: str) -> str:
    require_not_none(value, name)
    if not _IDENTIFIER_RE.match(value):
        raise ValueError(f"{name} must be a plain SQL identifier: {value!r}")
    return value
