"""SQLAlchemy async engine construction for the shared Postgres substrate."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from resources.substrates.postgres.config import PostgresSettings, to_async_url


def create_postgres_engine(
    settings: PostgresSettings, *, url: str | None = None
) -> AsyncEngine:
    """Construct a configured async engine using asyncpg.

    ``url`` overrides the configured URL, which is how per-key connection
    strings share one set of pool settings.
    """
    return create_async_engine(
        to_async_url(url) if url is not None else settings.url or "",
        pool_size=settings.pool_size,
        max_overflow=settings.max_overflow,
        pool_timeout=settings.pool_timeout_seconds,
        pool_pre_ping=settings.pool_pre_ping,
        echo=settings.echo,
        connect_args={"timeout": settings.connect_timeout_seconds},
    )
