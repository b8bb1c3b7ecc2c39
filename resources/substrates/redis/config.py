"""Pydantic settings for the Redis substrate backing the query cache."""

from __future__ import annotations

import os
from urllib.parse import quote_plus

from pydantic import BaseModel, ConfigDict, Field, model_validator

from packages.persist_shared.config import PersistSettings, resolve_component_settings

RESOURCE_COMPONENT_ID = "substrate_redis"


class RedisSettings(BaseModel):
    """Redis connectivity settings; ``url`` wins over split fields."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    url: str | None = None
    host: str = "redis"
    port: int = Field(default=6379, gt=0)
    db: int = Field(default=0, ge=0)
    password: str = ""
    password_env: str = ""
    ssl: bool = False
    connect_timeout_seconds: float = Field(default=5.0, gt=0)
    socket_timeout_seconds: float = Field(default=5.0, gt=0)
    max_connections: int = Field(default=20, gt=0)

    @model_validator(mode="after")
    def _resolve_url(self) -> "RedisSettings":
        if self.url is not None and self.url.strip() != "":
            object.__setattr__(self, "url", self.url.strip())
            return self

        host = self.host.strip()
        if host == "":
            raise ValueError("substrate.redis.host is required when url is unset")
        password = _resolve_password(
            password=self.password, password_env=self.password_env
        )
        auth = f":{quote_plus(password)}@" if password != "" else ""
        scheme = "rediss" if self.ssl else "redis"
        object.__setattr__(self, "url", f"{scheme}://{auth}{host}:{self.port}/{self.db}")
        return self


def _resolve_password(*, password: str, password_env: str) -> str:
    """Resolve password from inline value or environment variable reference."""
    inline = password.strip()
    env_name = password_env.strip()
    if inline != "" and env_name != "":
        raise ValueError(
            "substrate.redis.password and password_env are mutually exclusive"
        )
    if env_name == "":
        return inline

    resolved = os.environ.get(env_name, "").strip()
    if resolved == "":
        raise ValueError(
            f"substrate.redis.password_env references missing env var '{env_name}'"
        )
    return resolved


def resolve_redis_settings(settings: PersistSettings) -> RedisSettings:
    """Resolve Redis substrate settings from ``components.substrate.redis``."""
    return resolve_component_settings(
        settings=settings,
        component_id=RESOURCE_COMPONENT_ID,
        model=RedisSettings,
    )
