"""
Schema validation adapters - pluggable accept/reject checks run before a table mutation commits.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from .errors import ValidationError
from .schema import Record, ValidationIssue


class RecordValidator(ABC):
    """Abstract interface for record validation."""

    @abstractmethod
    def validate(self, record: Mapping[str, Any]) -> List[ValidationIssue]:
        """Return the issues found in record; an empty list means accepted."""
        pass

    def validate_partial(self, patch: Mapping[str, Any]) -> List[ValidationIssue]:
        """Validate only the fields present in patch.

        Issues about fields the patch does not carry (typically "required"
        errors) and whole-record issues with an empty path are dropped.
        """
        return [
            issue for issue in self.validate(patch)
            if issue.path and issue.path[0] in patch
        ]


class PydanticValidator(RecordValidator):
    """Validates records against anything pydantic can validate: a BaseModel, TypedDict or dataclass."""

    def __init__(self, schema: Any):
        self.schema = schema
        self._adapter = TypeAdapter(schema)

    def validate(self, record: Mapping[str, Any]) -> List[ValidationIssue]:
        try:
            self._adapter.validate_python(dict(record))
        except PydanticValidationError as e:
            return [
                ValidationIssue(path=tuple(error.get("loc", ())), message=error.get("msg", "invalid value"))
                for error in e.errors()
            ]
        return []


IssueLike = Union[ValidationIssue, Tuple[Any, str], str]


class FunctionValidator(RecordValidator):
    """Wraps a callable returning issues, (path, message) pairs or bare messages."""

    def __init__(self, func: Callable[[Mapping[str, Any]], Optional[Iterable[IssueLike]]]):
        self.func = func

    def validate(self, record: Mapping[str, Any]) -> List[ValidationIssue]:
        return [_to_issue(item) for item in (self.func(record) or [])]


def _to_issue(item: IssueLike) -> ValidationIssue:
    if isinstance(item, ValidationIssue):
        return item
    if isinstance(item, str):
        return ValidationIssue(path=(), message=item)
    path, message = item
    if isinstance(path, (list, tuple)):
        return ValidationIssue(path=tuple(path), message=message)
    return ValidationIssue(path=(path,), message=message)


@dataclass
class ValidationResult:
    """Either the accepted record or the issues that rejected it."""

    record: Optional[Record] = None
    issues: List[ValidationIssue] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.issues

    def error(self) -> Optional[ValidationError]:
        if self.ok:
            return None
        return ValidationError.from_issues(self.issues)

    def unwrap(self) -> Record:
        """Return the accepted record or raise ValidationError."""
        if not self.ok:
            raise self.error()
        return self.record


def check_record(validator: Optional[RecordValidator], record: Mapping[str, Any]) -> ValidationResult:
    """Run validator over one record. No validator accepts everything."""
    if validator is None:
        return ValidationResult(record=dict(record))
    issues = validator.validate(record)
    if issues:
        return ValidationResult(issues=list(issues))
    return ValidationResult(record=dict(record))


def check_batch(validator: Optional[RecordValidator], records: Sequence[Mapping[str, Any]]) -> ValidationResult:
    """Validate every record; issues from all failing records are collected with their batch index."""
    if validator is None:
        return ValidationResult()
    issues: List[ValidationIssue] = []
    for index, record in enumerate(records):
        issues.extend(issue.prefixed(index) for issue in validator.validate(record))
    return ValidationResult(issues=issues)


def check_patch(validator: Optional[RecordValidator], patch: Mapping[str, Any]) -> ValidationResult:
    if validator is None:
        return ValidationResult(record=dict(patch))
    issues = validator.validate_partial(patch)
    if issues:
        return ValidationResult(issues=list(issues))
    return ValidationResult(record=dict(patch))


def as_validator(schema: Any) -> Optional[RecordValidator]:
    """Coerce a table's validator argument: None, a RecordValidator, a plain callable or a pydantic-validatable type."""
    if schema is None or isinstance(schema, RecordValidator):
        return schema
    if isinstance(schema, type):
        return PydanticValidator(schema)
    if callable(schema):
        return FunctionValidator(schema)
    return PydanticValidator(schema)
