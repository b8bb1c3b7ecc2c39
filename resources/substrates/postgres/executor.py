"""Text-query executors over the async Postgres substrate."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Protocol

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from packages.persist_shared.errors import require_not_none
from resources.substrates.postgres.connections import ConnectionProvider
from resources.substrates.postgres.transaction import TransactionScope

Row = Mapping[str, Any]


class QueryExecutor(Protocol):
    """Execute parameterized SQL text and return materialized results."""

    async def fetch_rows(
        self, sql: str, parameters: Mapping[str, Any]
    ) -> Sequence[Row]:
        """Run a query and return every row, in data-store order."""

    async def execute(self, sql: str, parameters: Mapping[str, Any]) -> int:
        """Run a statement and return the affected row count."""


class EngineQueryExecutor(QueryExecutor):
    """Run each call on its own connection from a keyed engine.

    Writes autocommit through ``engine.begin()``; use ``SessionQueryExecutor``
    to group statements into one transaction.
    """

    def __init__(self, *, connections: ConnectionProvider, connection_key: str) -> None:
        self._connections = connections
        self._connection_key = require_not_none(connection_key, "connection_key")

    async def fetch_rows(
        self, sql: str, parameters: Mapping[str, Any]
    ) -> Sequence[Row]:
        engine = self._connections.engine(self._connection_key)
        async with engine.connect() as connection:
            result = await connection.execute(text(sql), dict(parameters))
            return tuple(result.mappings().all())

    async def execute(self, sql: str, parameters: Mapping[str, Any]) -> int:
        engine = self._connections.engine(self._connection_key)
        async with engine.begin() as connection:
            result = await connection.execute(text(sql), dict(parameters))
            return int(result.rowcount)


class SessionQueryExecutor(QueryExecutor):
    """Run statements inside one ``TransactionScope``; effects wait for commit."""

    def __init__(self, scope: TransactionScope[AsyncSession]) -> None:
        self._scope = require_not_none(scope, "scope")

    async def fetch_rows(
        self, sql: str, parameters: Mapping[str, Any]
    ) -> Sequence[Row]:
        result = await self._scope.session.execute(text(sql), dict(parameters))
        return tuple(result.mappings().all())

    async def execute(self, sql: str, parameters: Mapping[str, Any]) -> int:
        result = await self._scope.session.execute(text(sql), dict(parameters))
        return int(getattr(result, "rowcount", 0))
