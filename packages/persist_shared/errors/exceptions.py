"""Exception types raised by persistence components."""

from __future__ import annotations

from typing import TypeVar

T = TypeVar("T")


class PersistError(Exception):
    """Base class for persistence-layer failures."""


class NullArgumentError(ValueError):
    """Raised when a required argument is ``None``."""

    def __init__(self, argument_name: str) -> None:
        """Initialize the error with the offending argument name."""
        super().__init__(f"argument must not be None: {argument_name}")
        self.argument_name = argument_name


class TooManyRowsError(PersistError):
    """Raised when a single-entity query produces more than one row.

    This signals an unsound query or a broken uniqueness constraint. It is a
    defect, never a transient condition, and is not recovered locally.
    """

    def __init__(self, *, entity_type: str, row_count: int) -> None:
        """Initialize the error with the projected entity type and row count."""
        super().__init__(
            "A query for a single entity row resulted in more than one row. "
            f"Type: {entity_type}; rows: {row_count}"
        )
        self.entity_type = entity_type
        self.row_count = row_count


class CommitFailedError(PersistError):
    """Raised when the data store rejects a transaction commit."""


class TransactionStateError(PersistError):
    """Raised when a transaction scope is used after reaching a terminal state."""


class ColumnNotFoundError(KeyError):
    """Raised when a row does not carry the requested column."""

    def __init__(self, column: str) -> None:
        """Initialize the error with the missing column name."""
        super().__init__(f"column not found in row: {column}")
        self.column = column


def require_not_none(value: T | None, name: str) -> T:
    """Return ``value`` or raise ``NullArgumentError`` naming ``name``."""
    if value is None:
        raise NullArgumentError(name)
    return value
