"""Tests for settings precedence and component resolution."""

from __future__ import annotations

import os
from pathlib import Path

import pytest
from pydantic import BaseModel, ValidationError

from packages.persist_shared.config import (
    ConnectionStringNotFound,
    PersistSettings,
    SettingsConnectionStringProvider,
    load_settings,
    resolve_component_settings,
)
from packages.persist_shared.errors import NullArgumentError


class _ExampleSettings(BaseModel):
    key_prefix: str = "default"
    ttl_seconds: int = 10


def _write_yaml(path: Path, body: str) -> Path:
    path.write_text(body, encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def _clear_persist_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep ambient PERSIST_* variables out of precedence tests."""
    for key in list(os.environ):
        if key.startswith("PERSIST_"):
            monkeypatch.delenv(key, raising=False)


def test_yaml_file_values_load(tmp_path: Path) -> None:
    """Values from the YAML file should populate nested settings."""
    config = _write_yaml(
        tmp_path / "persist.yaml",
        "logging:\n  level: DEBUG\nconnection_strings:\n  main: postgresql://db/main\n",
    )

    settings = load_settings(config_path=config)

    assert settings.logging.level == "DEBUG"
    assert settings.connection_strings == {"main": "postgresql://db/main"}


def test_env_overrides_yaml_and_init_overrides_env(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Precedence should be init > env > yaml."""
    config = _write_yaml(
        tmp_path / "persist.yaml",
        "logging:\n  level: DEBUG\n  service: from-yaml\n",
    )
    monkeypatch.setenv("PERSIST_LOGGING__LEVEL", "WARNING")

    from_env = load_settings(config_path=config)
    from_init = load_settings(
        config_path=config, logging={"level": "ERROR", "service": "from-init"}
    )

    assert from_env.logging.level == "WARNING"
    assert from_env.logging.service == "from-yaml"
    assert from_init.logging.level == "ERROR"
    assert from_init.logging.service == "from-init"


def test_missing_yaml_file_falls_back_to_defaults(tmp_path: Path) -> None:
    """An absent config file is not an error."""
    settings = load_settings(config_path=tmp_path / "absent.yaml")

    assert settings.logging.level == "INFO"
    assert settings.connection_strings == {}


def test_blank_connection_strings_are_rejected() -> None:
    """Connection string values must be non-empty."""
    with pytest.raises(ValidationError, match="must be non-empty"):
        PersistSettings(connection_strings={"main": "  "})


def test_resolve_component_settings_reads_grouped_namespace() -> None:
    """Component settings should resolve from components.<kind>.<name>."""
    settings = PersistSettings(
        components={"service": {"query_cache": {"key_prefix": "app", "ttl_seconds": 5}}}
    )

    resolved = resolve_component_settings(
        settings=settings,
        component_id="service_query_cache",
        model=_ExampleSettings,
    )

    assert resolved == _ExampleSettings(key_prefix="app", ttl_seconds=5)


def test_resolve_component_settings_uses_model_defaults_when_absent() -> None:
    """Unconfigured components should get model defaults."""
    resolved = resolve_component_settings(
        settings=PersistSettings(),
        component_id="substrate_postgres",
        model=_ExampleSettings,
    )

    assert resolved == _ExampleSettings()


def test_resolve_component_settings_rejects_unknown_kind() -> None:
    """Component ids must be prefixed by a known kind."""
    with pytest.raises(ValueError, match="component_id"):
        resolve_component_settings(
            settings=PersistSettings(),
            component_id="actor_cli",
            model=_ExampleSettings,
        )


def test_flat_component_keys_are_rejected() -> None:
    """Flat service_/substrate_ keys should point at the grouped form."""
    with pytest.raises(ValidationError, match="components.service.query_cache"):
        PersistSettings(components={"service_query_cache": {}})


def test_connection_string_provider_resolves_by_key() -> None:
    """Known keys resolve, unknown keys raise a KeyError subclass."""
    provider = SettingsConnectionStringProvider(
        PersistSettings(connection_strings={"main": "postgresql://db/main"})
    )

    assert provider.by_key("main") == "postgresql://db/main"
    assert provider.keys() == ("main",)
    with pytest.raises(ConnectionStringNotFound) as excinfo:
        provider.by_key("reporting")
    assert isinstance(excinfo.value, KeyError)
    with pytest.raises(NullArgumentError):
        provider.by_key(None)  # type: ignore[arg-type]
