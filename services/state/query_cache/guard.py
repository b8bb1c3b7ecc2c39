"""Cardinality guard for single-entity queries."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

from packages.persist_shared.errors import TooManyRowsError

T = TypeVar("T")


def single_or_none(entities: Sequence[T], *, entity_type: str) -> T | None:
    """Return the only entity, ``None`` for none, or raise ``TooManyRowsError``."""
    if len(entities) > 1:
        raise TooManyRowsError(entity_type=entity_type, row_count=len(entities))
    return entities[0] if entities else None
