"""Shared 16-byte identifier primitives."""

from packages.persist_shared.ids.binary_id import BINARY_ID_LENGTH, BinaryId
from packages.persist_shared.ids.sqlalchemy import (
    BinaryIdType,
    binary_id_length_check,
    binary_id_primary_key_column,
)

__all__ = [
    "BINARY_ID_LENGTH",
    "BinaryId",
    "BinaryIdType",
    "binary_id_length_check",
    "binary_id_primary_key_column",
]
