"""Public API for shared persistence configuration utilities."""

from .connection_strings import (
    ConnectionStringNotFound,
    ConnectionStringProvider,
    SettingsConnectionStringProvider,
)
from .loader import load_settings
from .models import (
    DEFAULT_CONFIG_PATH,
    ComponentNamespaceSettings,
    ComponentsSettings,
    LoggingSettings,
    PersistSettings,
    resolve_component_settings,
)

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "ComponentNamespaceSettings",
    "ComponentsSettings",
    "ConnectionStringNotFound",
    "ConnectionStringProvider",
    "LoggingSettings",
    "PersistSettings",
    "SettingsConnectionStringProvider",
    "load_settings",
    "resolve_component_settings",
]
