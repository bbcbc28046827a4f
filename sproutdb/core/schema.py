"""
Query and record types shared by the table engine.
Wire (dict) forms are parsed here so the rest of the core only handles typed values.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from .errors import QueryError

Record = Dict[str, Any]

OR_KEY = "$or"
SORT_DIRECTIONS = ("asc", "desc")


class _Missing:
    """Sentinel for a field that is absent from a record."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()


@dataclass(frozen=True)
class ValidationIssue:
    path: Tuple[Union[str, int], ...]
    message: str

    def describe(self) -> str:
        """Human-readable form used in composite error messages."""
        if not self.path:
            return self.message
        return f"{'.'.join(str(part) for part in self.path)}: {self.message}"

    def prefixed(self, *prefix: Union[str, int]) -> "ValidationIssue":
        return ValidationIssue(path=tuple(prefix) + self.path, message=self.message)


@dataclass
class WhereClause:
    """A predicate over a record.

    fields are ANDed together; when any_of is not None at least one of its
    branches must also match. An empty clause matches every record.
    """

    fields: Dict[str, Any] = field(default_factory=dict)
    any_of: Optional[List["WhereClause"]] = None

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "WhereClause":
        """Parse the wire form, where a reserved "$or" key holds the branches."""
        if data is None:
            return cls()
        if isinstance(data, WhereClause):
            return data
        if not isinstance(data, Mapping):
            raise QueryError(f"where clause must be an object, got {type(data).__name__}")

        fields = {}
        any_of = None
        for key, condition in data.items():
            if key == OR_KEY:
                if not isinstance(condition, (list, tuple)):
                    raise QueryError("$or must be a list of where clauses")
                any_of = [cls.from_dict(branch) for branch in condition]
            else:
                fields[key] = condition
        return cls(fields=fields, any_of=any_of)

    def to_dict(self) -> Dict[str, Any]:
        data = dict(self.fields)
        if self.any_of is not None:
            data[OR_KEY] = [branch.to_dict() for branch in self.any_of]
        return data

    def is_empty(self) -> bool:
        return not self.fields and self.any_of is None


@dataclass(frozen=True)
class SortKey:
    field: str
    direction: str = "asc"

    def __post_init__(self):
        if self.direction not in SORT_DIRECTIONS:
            raise QueryError(f"Invalid sort direction for '{self.field}': {self.direction}")

    @property
    def descending(self) -> bool:
        return self.direction == "desc"


SortClause = List[SortKey]


def parse_sort(data: Any) -> Optional[SortClause]:
    """Accept {field: direction} (ordered), [(field, direction)], or a list of SortKey."""
    if data is None:
        return None
    if isinstance(data, Mapping):
        return [SortKey(name, direction) for name, direction in data.items()]
    if isinstance(data, (list, tuple)):
        keys = []
        for item in data:
            if isinstance(item, SortKey):
                keys.append(item)
            elif isinstance(item, (list, tuple)) and len(item) == 2:
                keys.append(SortKey(item[0], item[1]))
            else:
                raise QueryError(f"Invalid sort entry: {item!r}")
        return keys
    raise QueryError(f"sort must be an object or a list, got {type(data).__name__}")


@dataclass
class QueryOptions:
    where: Optional[WhereClause] = None
    sort: Optional[SortClause] = None
    limit: Optional[int] = None
    offset: Optional[int] = None

    def __post_init__(self):
        if self.where is not None and not isinstance(self.where, WhereClause):
            self.where = WhereClause.from_dict(self.where)
        if self.sort is not None:
            self.sort = parse_sort(self.sort)
        for name in ("limit", "offset"):
            value = getattr(self, name)
            if value is None:
                continue
            if isinstance(value, bool) or not isinstance(value, int):
                raise QueryError(f"{name} must be an integer")
            if value < 0:
                raise QueryError(f"{name} must be non-negative")

    @classmethod
    def coerce(cls, options: Union["QueryOptions", Mapping[str, Any], None]) -> "QueryOptions":
        """Turn None, a mapping with where/sort/limit/offset, or QueryOptions into QueryOptions."""
        if options is None:
            return cls()
        if isinstance(options, QueryOptions):
            return options
        if not isinstance(options, Mapping):
            raise QueryError(f"query options must be an object, got {type(options).__name__}")
        unknown = set(options) - {"where", "sort", "limit", "offset"}
        if unknown:
            raise QueryError(f"Unknown query options: {sorted(unknown)}")
        return cls(
            where=options.get("where"),
            sort=options.get("sort"),
            limit=options.get("limit"),
            offset=options.get("offset"),
        )
