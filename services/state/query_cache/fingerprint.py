"""Query fingerprints used as cache lookup keys.

A fingerprint is derived from query text alone. Bound parameters never take
part, so two calls sharing SQL text but differing in parameters address the
same cache slot; callers must make the text unique per distinct query or
accept the coarser caching.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from functools import cached_property

from packages.persist_shared.errors import require_not_none


@dataclass(frozen=True)
class QueryFingerprint:
    """Value-equality identity of one query's text."""

    text: str

    def __post_init__(self) -> None:
        require_not_none(self.text, "text")
        if not isinstance(self.text, str):
            raise TypeError("QueryFingerprint text must be a str")

    @classmethod
    def from_query(cls, sql: str) -> "QueryFingerprint":
        """Build the fingerprint for ``sql``; ``None`` raises ``NullArgumentError``."""
        return cls(require_not_none(sql, "sql"))

    @cached_property
    def digest(self) -> str:
        """Return the SHA-256 hex digest of the text for external cache keys."""
        return hashlib.sha256(self.text.encode("utf-8")).hexdigest()

    def __str__(self) -> str:
        return self.digest[:16]
