"""Typed column readers used by row projectors."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from packages.persist_shared.errors import ColumnNotFoundError, require_not_none
from packages.persist_shared.ids import BinaryId
from packages.persist_shared.timestamps import PreciseTimestamp


def get_value(row: Mapping[str, Any], column: str, *, nullable: bool = False) -> Any:
    """Return one column value; NULL is only accepted when ``nullable``."""
    require_not_none(row, "row")
    require_not_none(column, "column")
    try:
        value = row[column]
    except KeyError:
        raise ColumnNotFoundError(column) from None
    if value is None and not nullable:
        raise ValueError(f"column {column!r} is NULL")
    return value


def get_binary_id(row: Mapping[str, Any], column: str) -> BinaryId:
    """Read a 16-byte identifier column."""
    return BinaryId.from_bytes(get_value(row, column))


def get_optional_binary_id(row: Mapping[str, Any], column: str) -> BinaryId | None:
    """Read a nullable 16-byte identifier column."""
    value = get_value(row, column, nullable=True)
    return None if value is None else BinaryId.from_bytes(value)


def get_precise_timestamp(row: Mapping[str, Any], column: str) -> PreciseTimestamp:
    """Read a BIGINT tick-count column."""
    return PreciseTimestamp(int(get_value(row, column)))
