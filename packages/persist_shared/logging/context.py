"""Task-scoped structured logging fields.

Fields live in a ``contextvars`` variable holding an immutable snapshot. Every
change installs a new snapshot, so a field bound inside one asyncio task (one
connector call, one transaction scope) never shows up in a sibling task.
"""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from types import MappingProxyType
from typing import Iterator, Mapping

_EMPTY: Mapping[str, str] = MappingProxyType({})

_FIELDS: ContextVar[Mapping[str, str]] = ContextVar("persist_log_fields", default=_EMPTY)


def _merged(values: Mapping[str, object]) -> Mapping[str, str]:
    merged = dict(_FIELDS.get())
    merged.update(
        (str(key), str(value)) for key, value in values.items() if value is not None
    )
    return MappingProxyType(merged)


def get_context() -> dict[str, str]:
    """Return a mutable copy of the fields bound in the current task."""
    return dict(_FIELDS.get())


def bind_context(**values: object) -> None:
    """Bind fields for the rest of the current task; ``None`` values are skipped."""
    if values:
        _FIELDS.set(_merged(values))


def clear_context(*keys: str) -> None:
    """Drop the named fields, or every field when called without names."""
    if not keys:
        _FIELDS.set(_EMPTY)
        return
    remaining = {key: value for key, value in _FIELDS.get().items() if key not in keys}
    _FIELDS.set(MappingProxyType(remaining))


@contextmanager
def log_context(values: Mapping[str, object]) -> Iterator[None]:
    """Bind ``values`` for the duration of a block, then restore the prior fields."""
    token = _FIELDS.set(_merged(values))
    try:
        yield
    finally:
        _FIELDS.reset(token)
