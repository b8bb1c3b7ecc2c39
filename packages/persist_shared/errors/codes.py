"""Shared error code constants.

These constants are stable machine-readable identifiers for persistence-layer
failures. Connector-specific codes should extend this set in local modules
rather than modifying shared constants for one entity type.
"""

# Validation
VALIDATION_ERROR = "VALIDATION_ERROR"
INVALID_ARGUMENT = "INVALID_ARGUMENT"
NULL_ARGUMENT = "NULL_ARGUMENT"

# Not found
NOT_FOUND = "NOT_FOUND"
RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"

# Conflict
CONFLICT = "CONFLICT"
ALREADY_EXISTS = "ALREADY_EXISTS"

# Query correctness
TOO_MANY_ROWS = "TOO_MANY_ROWS"

# Transactions
COMMIT_FAILED = "COMMIT_FAILED"
TRANSACTION_STATE = "TRANSACTION_STATE"

# Dependency / external system
DEPENDENCY_FAILURE = "DEPENDENCY_FAILURE"
DEPENDENCY_TIMEOUT = "DEPENDENCY_TIMEOUT"
DEPENDENCY_UNAVAILABLE = "DEPENDENCY_UNAVAILABLE"

# Internal
INTERNAL_ERROR = "INTERNAL_ERROR"
UNEXPECTED_EXCEPTION = "UNEXPECTED_EXCEPTION"
