"""Exception normalization utilities for structured error contracts."""

from __future__ import annotations

from . import codes
from .exceptions import (
    CommitFailedError,
    NullArgumentError,
    TooManyRowsError,
    TransactionStateError,
)
from .factories import (
    dependency_error,
    internal_error,
    not_found_error,
    query_error,
    transaction_error,
    validation_error,
)
from .types import ErrorDetail


def exception_to_error(exc: Exception) -> ErrorDetail:
    """Normalize a Python exception into a structured ``ErrorDetail``.

    Persistence exceptions are matched first; the remaining mapping is
    intentionally conservative and generic. Substrates can layer driver-specific
    normalization before falling back to this function.
    """
    metadata = {"exception_type": type(exc).__name__}

    if isinstance(exc, TooManyRowsError):
        return query_error(
            str(exc),
            code=codes.TOO_MANY_ROWS,
            metadata={**metadata, "entity_type": exc.entity_type},
        )

    if isinstance(exc, CommitFailedError):
        return transaction_error(str(exc), code=codes.COMMIT_FAILED, metadata=metadata)

    if isinstance(exc, TransactionStateError):
        return transaction_error(
            str(exc), code=codes.TRANSACTION_STATE, metadata=metadata
        )

    if isinstance(exc, NullArgumentError):
        return validation_error(
            str(exc),
            code=codes.NULL_ARGUMENT,
            metadata={**metadata, "argument": exc.argument_name},
        )

    if isinstance(exc, ValueError):
        return validation_error(str(exc), code=codes.INVALID_ARGUMENT, metadata=metadata)

    if isinstance(exc, KeyError):
        return not_found_error(str(exc), code=codes.RESOURCE_NOT_FOUND, metadata=metadata)

    if isinstance(exc, TimeoutError):
        return dependency_error(
            str(exc) or "dependency timeout",
            code=codes.DEPENDENCY_TIMEOUT,
            retryable=True,
            metadata=metadata,
        )

    if isinstance(exc, ConnectionError):
        return dependency_error(
            str(exc) or "dependency unavailable",
            code=codes.DEPENDENCY_UNAVAILABLE,
            retryable=True,
            metadata=metadata,
        )

    return internal_error(
        str(exc) or "unexpected exception",
        code=codes.UNEXPECTED_EXCEPTION,
        metadata=metadata,
    )
