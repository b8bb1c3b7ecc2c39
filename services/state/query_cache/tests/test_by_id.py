"""Tests for identifier-keyed table connectors."""

from __future__ import annotations

from typing import Any, Mapping

import pytest

from packages.persist_shared.errors import NullArgumentError
from packages.persist_shared.ids import BinaryId
from services.state.query_cache.by_id import TableByIdConnector
from services.state.query_cache.cache import InMemoryQueryCache
from services.state.query_cache.connector import CachingQueryConnector
from services.state.query_cache.outcome import Computed

_FIRST = BinaryId.from_bytes(bytes(range(16)))
_SECOND = BinaryId.from_bytes(bytes(range(1, 17)))


class FakeExecutor:
    def __init__(self, rows: list[dict[str, Any]], *, affected: int = 1) -> None:
        self.rows = rows
        self.affected = affected
        self.reads: list[tuple[str, dict[str, Any]]] = []
        self.writes: list[tuple[str, dict[str, Any]]] = []

    async def fetch_rows(
        self, sql: str, parameters: Mapping[str, Any]
    ) -> list[dict[str, Any]]:
        self.reads.append((sql, dict(parameters)))
        return list(self.rows)

    async def execute(self, sql: str, parameters: Mapping[str, Any]) -> int:
        self.writes.append((sql, dict(parameters)))
        return self.affected


def _by_id(executor: FakeExecutor, **kwargs: Any) -> TableByIdConnector[dict[str, Any]]:
    connector = CachingQueryConnector(
        executor=executor,
        cache=InMemoryQueryCache(),
        projector=dict,
        entity_type="Order",
    )
    return TableByIdConnector(
        connector=connector,
        executor=executor,
        table=kwargs.pop("table", "orders"),
        **kwargs,
    )


@pytest.mark.asyncio
async def test_get_by_id_binds_id_bytes() -> None:
    """The id is sent as a bound 16-byte parameter."""
    executor = FakeExecutor([{"id": _FIRST.to_bytes()}])

    outcome = await _by_id(executor).get_by_id(_FIRST)

    assert isinstance(outcome, Computed)
    assert outcome.value == {"id": _FIRST.to_bytes()}
    assert executor.reads[0][1] == {"id": _FIRST.to_bytes()}
    assert str(_FIRST) in executor.reads[0][0]


@pytest.mark.asyncio
async def test_each_id_gets_its_own_fingerprint() -> None:
    executor = FakeExecutor([])
    connector = _by_id(executor)

    first = await connector.get_by_id(_FIRST)
    second = await connector.get_by_id(_SECOND)

    assert first.fingerprint != second.fingerprint
    assert connector.select_sql(_FIRST) == (
        f"SELECT * FROM orders WHERE id = :id /* id={_FIRST} */"
    )


@pytest.mark.asyncio
async def test_delete_by_id_runs_delete_statement() -> None:
    executor = FakeExecutor([], affected=0)

    await _by_id(executor, id_column="order_id").delete_by_id(_FIRST)

    assert executor.writes == [
        ("DELETE FROM orders WHERE order_id = :id", {"id": _FIRST.to_bytes()})
    ]


@pytest.mark.asyncio
async def test_none_id_is_rejected() -> None:
    executor = FakeExecutor([])

    with pytest.raises(NullArgumentError):
        await _by_id(executor).get_by_id(None)  # type: ignore[arg-type]
    with pytest.raises(NullArgumentError):
        await _by_id(executor).delete_by_id(None)  # type: ignore[arg-type]
    assert executor.reads == []
    assert executor.writes == []


@pytest.mark.parametrize("table", ["orders; DROP TABLE x", "1orders", "a.b.c", ""])
def test_table_names_must_be_plain_identifiers(table: str) -> None:
    with pytest.raises(ValueError, match="identifier"):
        _by_id(FakeExecutor([]), table=table)


def test_schema_qualified_table_is_accepted() -> None:
    connector = _by_id(FakeExecutor([]), table="sales.orders")

    assert connector.select_sql(_FIRST).startswith("SELECT * FROM sales.orders ")
