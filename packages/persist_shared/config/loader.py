"""Settings loading with deterministic precedence.

The cascade is always:
1) explicit keyword overrides
2) environment variables
3) YAML config file (``~/.config/persist/persist.yaml`` unless overridden)
4) model defaults

Environment variable format:
- Prefix: ``PERSIST_``
- Nested keys: ``__`` separator
- Example: ``PERSIST_LOGGING__LEVEL=DEBUG`` -> ``logging.level = "DEBUG"``
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, ClassVar

from .models import DEFAULT_CONFIG_PATH, PersistSettings


def load_settings(
    *, config_path: str | Path | None = None, **overrides: Any
) -> PersistSettings:
    """Load ``PersistSettings`` applying the standard precedence cascade."""
    if config_path is None or Path(config_path) == DEFAULT_CONFIG_PATH:
        return PersistSettings(**overrides)

    resolved_path = Path(config_path).expanduser()

    class _FileScopedSettings(PersistSettings):
        _config_path: ClassVar[Path] = resolved_path

    return _FileScopedSettings(**overrides)
