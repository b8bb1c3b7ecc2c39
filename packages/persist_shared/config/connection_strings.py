"""Symbolic connection-key resolution from loaded settings."""

from __future__ import annotations

from typing import Protocol

from packages.persist_shared.errors import require_not_none

from .models import PersistSettings


class ConnectionStringNotFound(KeyError):
    """Raised when no connection string is configured for a key."""

    def __init__(self, key: str) -> None:
        super().__init__(f"no connection string configured for key: {key}")
        self.key = key


class ConnectionStringProvider(Protocol):
    """Protocol mapping a symbolic key to a connection string."""

    def by_key(self, key: str) -> str:
        """Return the connection string registered for ``key``."""


class SettingsConnectionStringProvider(ConnectionStringProvider):
    """Resolve connection strings from ``PersistSettings.connection_strings``."""

    def __init__(self, settings: PersistSettings) -> None:
        self._connection_strings = dict(settings.connection_strings)

    def by_key(self, key: str) -> str:
        require_not_none(key, "key")
        try:
            return self._connection_strings[key]
        except KeyError:
            raise ConnectionStringNotFound(key) from None

    def keys(self) -> tuple[str, ...]:
        """Return configured connection keys in declaration order."""
        return tuple(self._connection_strings)
