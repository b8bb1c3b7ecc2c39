"""Canonical logging field names for persistence components.

These constants define a stable key set for structured logs and context
propagation so connectors, substrates, and callers emit the same names.
"""

TIMESTAMP = "timestamp"
LEVEL = "level"
LOGGER = "logger"
MESSAGE = "message"
EVENT = "event"

# Query cache fields.
FINGERPRINT = "fingerprint"
ENTITY_TYPE = "entity_type"
CACHE_OUTCOME = "cache_outcome"
ROW_COUNT = "row_count"
CONNECTION_KEY = "connection_key"

# Transaction fields.
TRANSACTION_STATE = "transaction_state"

# Common service-level fields.
SERVICE = "service"
ENVIRONMENT = "environment"
