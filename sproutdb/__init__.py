"""SproutDB - a disposable in-memory document database for tests and local development."""

from .core import (
    Database,
    FunctionValidator,
    PydanticValidator,
    QueryError,
    QueryOptions,
    RecordValidator,
    SortKey,
    SproutDBError,
    Table,
    TableExistsError,
    TableNotFoundError,
    ValidationError,
    ValidationIssue,
    WhereClause,
    create,
    table,
)

__all__ = [
    # Main API
    "create",
    "table",
    "Database",
    "Table",
    # Queries
    "QueryOptions",
    "WhereClause",
    "SortKey",
    # Validation
    "RecordValidator",
    "PydanticValidator",
    "FunctionValidator",
    "ValidationIssue",
    # Errors
    "SproutDBError",
    "ValidationError",
    "QueryError",
    "TableNotFoundError",
    "TableExistsError",
]

__version__ = "1.0.0"
