"""Health-check utilities for the Postgres shared substrate."""

from __future__ import annotations

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine

from packages.persist_shared.logging import get_logger

_LOGGER = get_logger(__name__)


async def ping(engine: AsyncEngine, *, timeout_seconds: float = 1.0) -> bool:
    """Return True when the database can answer a trivial query quickly."""
    timeout_ms = max(1, int(timeout_seconds * 1000))
    try:
        async with engine.connect() as conn:
            await conn.execute(
                text("SELECT set_config('statement_timeout', :timeout_value, false)"),
                {"timeout_value": f"{timeout_ms}ms"},
            )
            await conn.execute(text("SELECT 1"))
        return True
    except Exception as exc:  # noqa: BLE001
        _LOGGER.warning("Postgres ping failed: %s", type(exc).__name__)
        return False
