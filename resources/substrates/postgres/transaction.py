"""Commit-or-abandon transaction scopes.

A ``TransactionScope`` has exactly two legal endings: an explicit, successful
``commit()``, or release without one, which rolls back. Release happens on
every exit path of ``async with`` (normal return, exception, cancellation), so
a scope never commits implicitly.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from enum import Enum
from types import TracebackType
from typing import Generic, Protocol, TypeVar

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from packages.persist_shared.errors import (
    CommitFailedError,
    TransactionStateError,
    require_not_none,
)
from packages.persist_shared.logging import fields, get_logger, log_context

_LOGGER = get_logger(__name__)


class TransactionResource(Protocol):
    """Minimal resource contract owned by a scope (``AsyncSession`` fits)."""

    async def commit(self) -> None:
        """Persist all effects performed through the resource."""

    async def rollback(self) -> None:
        """Discard all uncommitted effects."""

    async def close(self) -> None:
        """Release the underlying connection."""


TResource = TypeVar("TResource", bound=TransactionResource)


class TransactionState(str, Enum):
    """Lifecycle states of a transaction scope."""

    OPEN = "open"
    COMMITTED = "committed"
    ABANDONED = "abandoned"


class TransactionScope(Generic[TResource]):
    """Unit-of-work boundary exclusively owning one transaction resource.

    Scopes are not shareable across concurrent operations; each one belongs to
    the call path that acquired it.
    """

    def __init__(self, resource: TResource) -> None:
        self._resource = require_not_none(resource, "resource")
        self._state = TransactionState.OPEN
        self._closed = False

    @property
    def state(self) -> TransactionState:
        """Return the current lifecycle state."""
        return self._state

    @property
    def session(self) -> TResource:
        """Return the owned resource while the scope is open."""
        if self._state is not TransactionState.OPEN:
            raise TransactionStateError(
                f"transaction is {self._state.value}; its session is no longer usable"
            )
        return self._resource

    async def commit(self) -> None:
        """Commit the transaction.

        Raises ``CommitFailedError`` when the data store rejects the commit, in
        which case the scope is abandoned. Raises ``TransactionStateError`` when
        the scope already reached a terminal state.
        """
        if self._state is not TransactionState.OPEN:
            raise TransactionStateError(
                f"cannot commit a transaction that is already {self._state.value}"
            )
        try:
            await self._resource.commit()
        except Exception as exc:
            self._state = TransactionState.ABANDONED
            await self._rollback_after_failed_commit()
            raise CommitFailedError(f"transaction commit was rejected: {exc}") from exc
        self._state = TransactionState.COMMITTED

    async def release(self) -> None:
        """Abandon the scope unless committed, then close the resource once."""
        try:
            if self._state is TransactionState.OPEN:
                self._state = TransactionState.ABANDONED
                with log_context({fields.TRANSACTION_STATE: self._state.value}):
                    _LOGGER.debug("Transaction released without commit; rolling back")
                await self._resource.rollback()
        finally:
            if not self._closed:
                self._closed = True
                await self._resource.close()

    async def _rollback_after_failed_commit(self) -> None:
        # The commit failure is the error the caller needs; a secondary
        # rollback failure is logged rather than replacing it.
        try:
            await self._resource.rollback()
        except Exception:
            _LOGGER.warning("Rollback after failed commit also failed", exc_info=True)

    async def __aenter__(self) -> "TransactionScope[TResource]":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.release()


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create an async session factory bound to the provided engine."""
    return async_sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


class SessionTransactions:
    """Acquire ``TransactionScope`` instances over fresh ``AsyncSession`` objects."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    def acquire(self) -> TransactionScope[AsyncSession]:
        """Return a new open scope owning a new session."""
        return TransactionScope(self._session_factory())


@asynccontextmanager
async def transaction_scope(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncIterator[TransactionScope[AsyncSession]]:
    """Yield an open scope, released and rolled back unless committed on exit."""
    async with SessionTransactions(session_factory).acquire() as scope:
        yield scope
