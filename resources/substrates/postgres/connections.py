"""Connection-key based engine provider."""

from __future__ import annotations

from typing import Callable

from sqlalchemy.ext.asyncio import AsyncEngine

from packages.persist_shared.config import ConnectionStringProvider
from packages.persist_shared.errors import require_not_none
from packages.persist_shared.logging import fields, get_logger, log_context
from resources.substrates.postgres.config import PostgresSettings
from resources.substrates.postgres.engine import create_postgres_engine

_LOGGER = get_logger(__name__)

EngineFactory = Callable[..., AsyncEngine]


class ConnectionProvider:
    """Lazily build and cache one ``AsyncEngine`` per connection key."""

    def __init__(
        self,
        *,
        settings: PostgresSettings,
        connection_strings: ConnectionStringProvider,
        engine_factory: EngineFactory = create_postgres_engine,
    ) -> None:
        self._settings = settings
        self._connection_strings = connection_strings
        self._engine_factory = engine_factory
        self._engines: dict[str, AsyncEngine] = {}

    def engine(self, connection_key: str) -> AsyncEngine:
        """Return the engine for ``connection_key``, creating it on first use."""
        require_not_none(connection_key, "connection_key")
        existing = self._engines.get(connection_key)
        if existing is not None:
            return existing

        url = self._connection_strings.by_key(connection_key)
        engine = self._engine_factory(self._settings, url=url)
        self._engines[connection_key] = engine
        with log_context({fields.CONNECTION_KEY: connection_key}):
            _LOGGER.debug("Created engine for connection key")
        return engine

    async def dispose(self) -> None:
        """Dispose every engine created by this provider."""
        engines = list(self._engines.values())
        self._engines.clear()
        for engine in engines:
            await engine.dispose()
