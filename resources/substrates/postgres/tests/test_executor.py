"""Tests for engine- and session-backed query executors."""

from __future__ import annotations

from typing import Any

import pytest

from packages.persist_shared.errors import TransactionStateError
from resources.substrates.postgres.executor import (
    EngineQueryExecutor,
    SessionQueryExecutor,
)
from resources.substrates.postgres.transaction import TransactionScope


class _FakeResult:
    def __init__(self, rows: list[dict[str, Any]], rowcount: int = 0) -> None:
        self._rows = rows
        self.rowcount = rowcount

    def mappings(self) -> "_FakeResult":
        return self

    def all(self) -> list[dict[str, Any]]:
        return list(self._rows)


class _FakeConnection:
    """Async connection double recording statements and parameters."""

    def __init__(self, result: _FakeResult) -> None:
        self.result = result
        self.calls: list[tuple[str, dict[str, Any]]] = []

    async def __aenter__(self) -> "_FakeConnection":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        del exc_type, exc, tb

    async def execute(self, statement, params) -> _FakeResult:
        self.calls.append((str(statement), params))
        return self.result


class _FakeEngine:
    def __init__(self, conn: _FakeConnection) -> None:
        self.conn = conn
        self.opened: list[str] = []

    def connect(self) -> _FakeConnection:
        self.opened.append("connect")
        return self.conn

    def begin(self) -> _FakeConnection:
        self.opened.append("begin")
        return self.conn


class _FakeConnections:
    def __init__(self, engine: _FakeEngine) -> None:
        self._engine = engine
        self.keys: list[str] = []

    def engine(self, connection_key: str) -> _FakeEngine:
        self.keys.append(connection_key)
        return self._engine


class _FakeSession:
    def __init__(self, result: _FakeResult) -> None:
        self.result = result
        self.calls: list[tuple[str, dict[str, Any]]] = []

    async def execute(self, statement, params) -> _FakeResult:
        self.calls.append((str(statement), params))
        return self.result

    async def commit(self) -> None:
        return None

    async def rollback(self) -> None:
        return None

    async def close(self) -> None:
        return None


@pytest.mark.asyncio
async def test_engine_executor_fetches_rows_in_order() -> None:
    """Reads should use a plain connection and keep data-store row order."""
    rows = [{"id": 2}, {"id": 1}]
    engine = _FakeEngine(_FakeConnection(_FakeResult(rows)))
    connections = _FakeConnections(engine)
    executor = EngineQueryExecutor(connections=connections, connection_key="main")

    fetched = await executor.fetch_rows("SELECT id FROM orders", {"limit": 2})

    assert fetched == ({"id": 2}, {"id": 1})
    assert connections.keys == ["main"]
    assert engine.opened == ["connect"]
    assert engine.conn.calls == [("SELECT id FROM orders", {"limit": 2})]


@pytest.mark.asyncio
async def test_engine_executor_writes_inside_begin_block() -> None:
    """Writes should run in an engine.begin() block and report row count."""
    engine = _FakeEngine(_FakeConnection(_FakeResult([], rowcount=3)))
    executor = EngineQueryExecutor(
        connections=_FakeConnections(engine), connection_key="main"
    )

    affected = await executor.execute("DELETE FROM orders", {})

    assert affected == 3
    assert engine.opened == ["begin"]


@pytest.mark.asyncio
async def test_session_executor_runs_inside_open_scope() -> None:
    """Session execution should route through the scope's session."""
    session = _FakeSession(_FakeResult([{"id": 1}], rowcount=1))
    scope = TransactionScope(session)
    executor = SessionQueryExecutor(scope)

    assert await executor.fetch_rows("SELECT 1", {}) == ({"id": 1},)
    assert await executor.execute("UPDATE t SET x = 1", {"x": 1}) == 1
    assert session.calls[1] == ("UPDATE t SET x = 1", {"x": 1})


@pytest.mark.asyncio
async def test_session_executor_refuses_finished_scope() -> None:
    """Executing after the scope has ended is a usage error."""
    scope = TransactionScope(_FakeSession(_FakeResult([])))
    executor = SessionQueryExecutor(scope)
    await scope.release()

    with pytest.raises(TransactionStateError):
        await executor.fetch_rows("SELECT 1", {})
