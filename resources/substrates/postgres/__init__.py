"""Shared async Postgres substrate primitives."""

from resources.substrates.postgres.config import (
    RESOURCE_COMPONENT_ID,
    PostgresSettings,
    resolve_postgres_settings,
)
from resources.substrates.postgres.connections import ConnectionProvider
from resources.substrates.postgres.engine import create_postgres_engine
from resources.substrates.postgres.errors import normalize_postgres_error
from resources.substrates.postgres.executor import (
    EngineQueryExecutor,
    QueryExecutor,
    Row,
    SessionQueryExecutor,
)
from resources.substrates.postgres.health import ping
from resources.substrates.postgres.rows import (
    get_binary_id,
    get_optional_binary_id,
    get_precise_timestamp,
    get_value,
)
from resources.substrates.postgres.transaction import (
    SessionTransactions,
    TransactionResource,
    TransactionScope,
    TransactionState,
    create_session_factory,
    transaction_scope,
)

__all__ = [
    "RESOURCE_COMPONENT_ID",
    "ConnectionProvider",
    "EngineQueryExecutor",
    "PostgresSettings",
    "QueryExecutor",
    "Row",
    "SessionQueryExecutor",
    "SessionTransactions",
    "TransactionResource",
    "TransactionScope",
    "TransactionState",
    "create_postgres_engine",
    "create_session_factory",
    "get_binary_id",
    "get_optional_binary_id",
    "get_precise_timestamp",
    "get_value",
    "normalize_postgres_error",
    "ping",
    "resolve_postgres_settings",
    "transaction_scope",
]
