"""
Error taxonomy for the table engine.
Every error raised by the core derives from SproutDBError so callers can catch them as a family.
"""

from typing import List, Optional


class SproutDBError(Exception):
    """Base class for all SproutDB errors."""


class ValidationError(SproutDBError):
    """Raised when a configured validator rejects one or more records.

    Carries the full ordered list of field-level issues and a composite message.
    """

    def __init__(self, message: str, issues: Optional[List["ValidationIssue"]] = None):
        super().__init__(message)
        self.message = message
        self.issues = list(issues or [])

    @classmethod
    def from_issues(cls, issues: List["ValidationIssue"]) -> "ValidationError":
        """Build an error whose message concatenates every issue."""
        reasons = "; ".join(issue.describe() for issue in issues)
        return cls(f"Validation failed: {reasons}", issues)


class QueryError(SproutDBError):
    """Raised for malformed query input (unknown operators, bad operands, bad options)."""


class TableNotFoundError(SproutDBError, KeyError):
    """Raised when an operation targets an unregistered table name."""

    def __init__(self, name: str):
        super().__init__(f"Table not found: {name}")
        self.name = name

    def __str__(self) -> str:
        return self.args[0]


class TableExistsError(SproutDBError):
    """Raised when registering a table name that is already taken."""

    def __init__(self, name: str):
        super().__init__(f"Table already exists: {name}")
        self.name = name


class SeedError(SproutDBError):
    """Raised when seed data cannot be read or has the wrong shape."""

