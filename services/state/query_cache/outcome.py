"""Two-variant result of a cached lookup.

``CacheHit`` says a value is already cached for the fingerprint and must be
fetched from the caller's own store. ``Computed`` carries a fresh value the
caller is expected to cache under the same fingerprint. Consume with
``match``::

    match outcome:
        case CacheHit(fingerprint=fp):
            value = store.get(fp)
        case Computed(fingerprint=fp, value=value):
            store.put(fp, value)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from services.state.query_cache.fingerprint import QueryFingerprint

T = TypeVar("T")


@dataclass(frozen=True)
class CacheHit(Generic[T]):
    """A value for ``fingerprint`` is already cached; no payload is carried."""

    fingerprint: QueryFingerprint


@dataclass(frozen=True)
class Computed(Generic[T]):
    """Freshly computed, not yet cached value for ``fingerprint``."""

    fingerprint: QueryFingerprint
    value: T


QueryOutcome = Union[CacheHit[T], Computed[T]]
