"""Factory helpers for creating consistent structured errors."""

from __future__ import annotations

from typing import Mapping

from . import codes
from .types import ErrorCategory, ErrorDetail


def validation_error(
    message: str,
    *,
    code: str = codes.VALIDATION_ERROR,
    metadata: Mapping[str, str] | None = None,
) -> ErrorDetail:
    """Create a validation-category error."""
    return _detail(message, code, ErrorCategory.VALIDATION, False, metadata)


def not_found_error(
    message: str,
    *,
    code: str = codes.NOT_FOUND,
    metadata: Mapping[str, str] | None = None,
) -> ErrorDetail:
    """Create a not-found-category error."""
    return _detail(message, code, ErrorCategory.NOT_FOUND, False, metadata)


def conflict_error(
    message: str,
    *,
    code: str = codes.CONFLICT,
    metadata: Mapping[str, str] | None = None,
) -> ErrorDetail:
    """Create a conflict-category error."""
    return _detail(message, code, ErrorCategory.CONFLICT, False, metadata)


def query_error(
    message: str,
    *,
    code: str = codes.TOO_MANY_ROWS,
    metadata: Mapping[str, str] | None = None,
) -> ErrorDetail:
    """Create a query-correctness error; these are defects, never retryable."""
    return _detail(message, code, ErrorCategory.QUERY, False, metadata)


def transaction_error(
    message: str,
    *,
    code: str = codes.COMMIT_FAILED,
    metadata: Mapping[str, str] | None = None,
) -> ErrorDetail:
    """Create a transaction-category error."""
    return _detail(message, code, ErrorCategory.TRANSACTION, False, metadata)


def dependency_error(
    message: str,
    *,
    code: str = codes.DEPENDENCY_FAILURE,
    retryable: bool = True,
    metadata: Mapping[str, str] | None = None,
) -> ErrorDetail:
    """Create a dependency-category error."""
    return _detail(message, code, ErrorCategory.DEPENDENCY, retryable, metadata)


def internal_error(
    message: str,
    *,
    code: str = codes.INTERNAL_ERROR,
    metadata: Mapping[str, str] | None = None,
) -> ErrorDetail:
    """Create an internal-category error."""
    return _detail(message, code, ErrorCategory.INTERNAL, False, metadata)


def _detail(
    message: str,
    code: str,
    category: ErrorCategory,
    retryable: bool,
    metadata: Mapping[str, str] | None,
) -> ErrorDetail:
    return ErrorDetail(
        code=code,
        message=message,
        category=category,
        retryable=retryable,
        metadata={} if metadata is None else dict(metadata),
    )
