"""
Table/query engine: records, where-clause matching, query pipeline and validation.
"""

from .conditions import evaluate
from .database import Database, create
from .errors import QueryError, SeedError, SproutDBError, TableExistsError, TableNotFoundError, ValidationError
from .matcher import matches
from .query import execute
from .schema import MISSING, QueryOptions, SortKey, ValidationIssue, WhereClause
from .table import Table, table
from .validation import FunctionValidator, PydanticValidator, RecordValidator, ValidationResult

__all__ = [
    'evaluate',
    'matches',
    'execute',
    'Database',
    'create',
    'Table',
    'table',
    'MISSING',
    'QueryOptions',
    'SortKey',
    'WhereClause',
    'ValidationIssue',
    'RecordValidator',
    'PydanticValidator',
    'FunctionValidator',
    'ValidationResult',
    'SproutDBError',
    'ValidationError',
    'QueryError',
    'TableNotFoundError',
    'TableExistsError',
    'SeedError',
]
