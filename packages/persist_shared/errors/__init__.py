"""Public shared error API for persistence components."""

from . import codes
from .exceptions import (
    ColumnNotFoundError,
    CommitFailedError,
    NullArgumentError,
    PersistError,
    TooManyRowsError,
    TransactionStateError,
    require_not_none,
)
from .factories import (
    conflict_error,
    dependency_error,
    internal_error,
    not_found_error,
    query_error,
    transaction_error,
    validation_error,
)
from .normalize import exception_to_error
from .types import ErrorCategory, ErrorDetail

__all__ = [
    "ColumnNotFoundError",
    "CommitFailedError",
    "ErrorCategory",
    "ErrorDetail",
    "NullArgumentError",
    "PersistError",
    "TooManyRowsError",
    "TransactionStateError",
    "codes",
    "conflict_error",
    "dependency_error",
    "exception_to_error",
    "internal_error",
    "not_found_error",
    "query_error",
    "require_not_none",
    "transaction_error",
    "validation_error",
]
