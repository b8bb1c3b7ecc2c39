"""Pydantic settings for the shared Postgres substrate."""

from __future__ import annotations

import os
from urllib.parse import quote_plus

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from packages.persist_shared.config import PersistSettings, resolve_component_settings

RESOURCE_COMPONENT_ID = "substrate_postgres"

_ASYNC_SCHEME = "postgresql+asyncpg"


class PostgresSettings(BaseModel):
    """Async engine construction and pool settings."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    url: str | None = None
    host: str = "postgres"
    port: int = Field(default=5432, gt=0)
    database: str = "persist"
    user: str = "persist"
    password: str = ""
    password_env: str = ""
    pool_size: int = Field(default=5, gt=0)
    max_overflow: int = Field(default=10, ge=0)
    pool_timeout_seconds: float = Field(default=30.0, gt=0)
    pool_pre_ping: bool = True
    connect_timeout_seconds: float = Field(default=10.0, gt=0)
    health_timeout_seconds: float = Field(default=1.0, gt=0)
    echo: bool = False

    @field_validator("pool_pre_ping", mode="before")
    @classmethod
    def _coerce_pool_pre_ping(cls, value: object) -> object:
        """Normalize boolean-like strings from env and YAML sources."""
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered in {"true", "1", "yes", "on"}:
                return True
            if lowered in {"false", "0", "no", "off"}:
                return False
        return value

    @model_validator(mode="after")
    def _resolve_url(self) -> "PostgresSettings":
        """Normalize an explicit URL or build one from split fields."""
        if self.url is not None and self.url.strip() != "":
            object.__setattr__(self, "url", to_async_url(self.url.strip()))
            return self
        object.__setattr__(self, "url", _build_url_from_parts(self))
        return self


def to_async_url(url: str) -> str:
    """Rewrite plain ``postgresql://`` URLs to the asyncpg driver scheme."""
    for prefix in ("postgresql://", "postgres://", "postgresql+psycopg://"):
        if url.startswith(prefix):
            return f"{_ASYNC_SCHEME}://{url[len(prefix):]}"
    return url


def _build_url_from_parts(postgres: PostgresSettings) -> str:
    """Construct an asyncpg SQLAlchemy URL from split config values."""
    host = postgres.host.strip()
    database = postgres.database.strip()
    user = postgres.user.strip()
    if host == "":
        raise ValueError("substrate.postgres.host is required when url is unset")
    if database == "":
        raise ValueError("substrate.postgres.database is required when url is unset")
    if user == "":
        raise ValueError("substrate.postgres.user is required when url is unset")

    password = _resolve_password(
        password=postgres.password, password_env=postgres.password_env
    )
    auth = quote_plus(user)
    if password != "":
        auth += f":{quote_plus(password)}"
    return f"{_ASYNC_SCHEME}://{auth}@{host}:{postgres.port}/{quote_plus(database)}"


def _resolve_password(*, password: str, password_env: str) -> str:
    """Resolve password from inline value or environment variable reference."""
    inline = password.strip()
    env_name = password_env.strip()
    if inline != "" and env_name != "":
        raise ValueError(
            "substrate.postgres.password and password_env are mutually exclusive"
        )
    if env_name == "":
        return inline

    resolved = os.environ.get(env_name, "").strip()
    if resolved == "":
        raise ValueError(
            f"substrate.postgres.password_env references missing env var '{env_name}'"
        )
    return resolved


def resolve_postgres_settings(settings: PersistSettings) -> PostgresSettings:
    """Resolve Postgres substrate settings from ``components.substrate.postgres``."""
    return resolve_component_settings(
        settings=settings,
        component_id=RESOURCE_COMPONENT_ID,
        model=PostgresSettings,
    )
