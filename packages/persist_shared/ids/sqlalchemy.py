"""SQLAlchemy helpers for ``BinaryId``-backed columns."""

from __future__ import annotations

from typing import Any

from sqlalchemy import CheckConstraint, Column
from sqlalchemy.dialects.postgresql import BYTEA
from sqlalchemy.types import TypeDecorator

from packages.persist_shared.ids.binary_id import BINARY_ID_LENGTH, BinaryId


class BinaryIdType(TypeDecorator[BinaryId]):
    """Store ``BinaryId`` values as 16-byte BYTEA."""

    impl = BYTEA
    cache_ok = True

    def process_bind_param(self, value: Any, dialect: Any) -> bytes | None:
        if value is None:
            return None
        if isinstance(value, BinaryId):
            return value.to_bytes()
        return BinaryId.from_bytes(value).to_bytes()

    def process_result_value(self, value: Any, dialect: Any) -> BinaryId | None:
        if value is None:
            return None
        return BinaryId.from_bytes(value)


def binary_id_primary_key_column(
    name: str = "id",
    *,
    length_constraint_name: str | None = None,
) -> Column[BinaryId]:
    """Return a standard 16-byte primary-key column definition."""
    constraint = binary_id_length_check(
        name,
        length_constraint_name or f"ck_{name}_binary_id_16",
    )
    return Column(name, BinaryIdType(), constraint, primary_key=True, nullable=False)


def binary_id_length_check(column_name: str, constraint_name: str) -> CheckConstraint:
    """Return a CHECK constraint enforcing fixed 16-byte identifier storage."""
    return CheckConstraint(
        f"octet_length({column_name}) = {BINARY_ID_LENGTH}",
        name=constraint_name,
    )
