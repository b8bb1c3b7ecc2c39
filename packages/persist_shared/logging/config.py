"""Root logger setup for persistence components.

One stdout handler renders each record as a JSON line or as a plain line with
``key=value`` context. Noisy library loggers (the SQLAlchemy engine, asyncpg)
get their own thresholds from ``LoggingSettings.logger_levels``.
"""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

from packages.persist_shared.config.models import LoggingSettings

from . import fields
from .context import bind_context, get_context

_CORE_FIELDS = frozenset({fields.TIMESTAMP, fields.LEVEL, fields.LOGGER, fields.MESSAGE})


class ContextFilter(logging.Filter):
    """Attach the task's bound fields to each record as ``record.context``."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.context = get_context()
        return True


def _record_context(record: logging.LogRecord) -> dict[str, str]:
    context = getattr(record, "context", None)
    return context if isinstance(context, dict) else {}


class JsonFormatter(logging.Formatter):
    """Render one JSON object per record; context never overrides core fields."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            key: value
            for key, value in _record_context(record).items()
            if key not in _CORE_FIELDS
        }
        payload[fields.TIMESTAMP] = datetime.fromtimestamp(
            record.created, UTC
        ).isoformat()
        payload[fields.LEVEL] = record.levelname
        payload[fields.LOGGER] = record.name
        payload[fields.MESSAGE] = record.getMessage()
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str, separators=(",", ":"))


class PlainFormatter(logging.Formatter):
    """Console formatter: timestamp, level, logger, message, then sorted context."""

    def __init__(self) -> None:
        super().__init__(
            fmt="%(asctime)s %(levelname)s %(name)s %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S%z",
        )

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = _record_context(record)
        if not context:
            return line
        pairs = " ".join(f"{key}={context[key]}" for key in sorted(context))
        return f"{line} {pairs}"


def configure_logging(
    *,
    level: str = "INFO",
    json_output: bool = True,
    service: str | None = None,
    environment: str | None = None,
    logger_levels: Mapping[str, str] | None = None,
) -> None:
    """Install a single stdout handler on the root logger.

    Calling again replaces the handler instead of adding a second one.
    """
    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.setLevel(level.upper())

    handler = logging.StreamHandler(stream=sys.stdout)
    handler.addFilter(ContextFilter())
    handler.setFormatter(JsonFormatter() if json_output else PlainFormatter())
    root.addHandler(handler)

    for name, logger_level in (logger_levels or {}).items():
        logging.getLogger(name).setLevel(logger_level.upper())

    bind_context(**{fields.SERVICE: service, fields.ENVIRONMENT: environment})


def configure_logging_from_settings(settings: LoggingSettings) -> None:
    """Apply a loaded ``LoggingSettings`` section."""
    configure_logging(
        level=settings.level,
        json_output=settings.json_output,
        service=settings.service,
        environment=settings.environment,
        logger_levels=settings.logger_levels,
    )


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a standard-library logger, normally ``get_logger(__name__)``."""
    return logging.getLogger(name)
