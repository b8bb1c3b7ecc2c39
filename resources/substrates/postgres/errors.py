"""Postgres/SQLAlchemy exception normalization helpers."""

from __future__ import annotations

from sqlalchemy import exc as sa_exc

from packages.persist_shared.errors import (
    CommitFailedError,
    ErrorDetail,
    codes,
    conflict_error,
    dependency_error,
    exception_to_error,
    transaction_error,
)


def normalize_postgres_error(exc: Exception) -> ErrorDetail:
    """Map low-level DB exceptions into shared structured error semantics.

    A ``CommitFailedError`` is classified by its underlying driver cause, so a
    rejected commit caused by a unique violation still reads as a conflict.
    """
    if isinstance(exc, CommitFailedError) and isinstance(exc.__cause__, Exception):
        cause_detail = normalize_postgres_error(exc.__cause__)
        return transaction_error(
            str(exc),
            code=codes.COMMIT_FAILED,
            metadata={
                **cause_detail.metadata,
                "cause_code": cause_detail.code,
                "exception_type": type(exc).__name__,
            },
        )

    metadata = {"exception_type": type(exc).__name__}
    message = str(exc)

    if isinstance(exc, sa_exc.IntegrityError):
        if "UniqueViolation" in message or "duplicate key value" in message:
            return conflict_error(
                "resource already exists",
                code=codes.ALREADY_EXISTS,
                metadata=metadata,
            )
        return conflict_error("integrity constraint violated", metadata=metadata)

    if isinstance(exc, (sa_exc.OperationalError, sa_exc.TimeoutError)):
        return dependency_error(
            "postgres unavailable",
            code=codes.DEPENDENCY_UNAVAILABLE,
            retryable=True,
            metadata=metadata,
        )

    if isinstance(exc, (sa_exc.InterfaceError, sa_exc.ProgrammingError)):
        return dependency_error(
            "postgres request failed",
            code=codes.DEPENDENCY_FAILURE,
            retryable=False,
            metadata=metadata,
        )

    return exception_to_error(exc)
