"""Canonical structured error types for persistence components.

Exceptions are the in-process failure signal; ``ErrorDetail`` is the
transport-agnostic shape used when a caller needs to report one of those
failures across a boundary (logs, API responses, job results).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping


class ErrorCategory(str, Enum):
    """High-level error categories shared across persistence components."""

    UNSPECIFIED = "unspecified"
    VALIDATION = "validation"
    CONFLICT = "conflict"
    NOT_FOUND = "not_found"
    QUERY = "query"
    TRANSACTION = "transaction"
    DEPENDENCY = "dependency"
    INTERNAL = "internal"


@dataclass(frozen=True)
class ErrorDetail:
    """Structured error object describing one normalized failure."""

    code: str
    message: str
    category: ErrorCategory
    retryable: bool = False
    metadata: Mapping[str, str] = field(default_factory=dict)
