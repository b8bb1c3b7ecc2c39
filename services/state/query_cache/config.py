"""Pydantic settings for query cache behavior."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from packages.persist_shared.config import PersistSettings, resolve_component_settings

SERVICE_COMPONENT_ID = "service_query_cache"


class QueryCacheSettings(BaseModel):
    """Cache backend selection and connector defaults."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    backend: Literal["memory", "redis"] = "memory"
    key_prefix: str = "persist"
    ttl_seconds: int | None = Field(default=300, gt=0)
    connection_key: str = "default"

    @field_validator("key_prefix", "connection_key", mode="before")
    @classmethod
    def _reject_blank(cls, value: object) -> object:
        """Reject blank names used for cache keys and connection lookup."""
        if isinstance(value, str):
            normalized = value.strip()
            if normalized == "":
                raise ValueError("value must be non-empty")
            return normalized
        return value


def resolve_query_cache_settings(settings: PersistSettings) -> QueryCacheSettings:
    """Resolve query cache settings from ``components.service.query_cache``."""
    return resolve_component_settings(
        settings=settings,
        component_id=SERVICE_COMPONENT_ID,
        model=QueryCacheSettings,
    )
