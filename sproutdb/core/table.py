"""
Table store - one table's ordered record sequence with insert/find/all/delete/update/load.
"""

import threading
from typing import Any, List, Mapping, Optional, Sequence, Tuple, Union

from ..util.logging import logger
from .matcher import matches
from .query import execute
from .schema import QueryOptions, Record, WhereClause
from .validation import RecordValidator, ValidationResult, as_validator, check_batch, check_patch, check_record

WhereLike = Union[WhereClause, Mapping[str, Any], None]


def _where(where: WhereLike) -> Optional[WhereClause]:
    if where is None:
        return None
    return WhereClause.from_dict(where)


class Table:
    """An in-memory table of loosely-typed records.

    Records are held in an immutable tuple which every mutation replaces
    wholesale, so lists returned by earlier reads stay valid snapshots. Reads
    return new lists of record copies.
    """

    def __init__(self, validator: Any = None, name: Optional[str] = None):
        self.name = name
        self.validator: Optional[RecordValidator] = as_validator(validator)
        self._records: Tuple[Record, ...] = ()
        self._lock = threading.RLock()

    def __len__(self) -> int:
        return len(self._records)

    def __repr__(self) -> str:
        return f"Table(name={self.name!r}, records={len(self._records)})"

    def check(self, record: Mapping[str, Any]) -> ValidationResult:
        """Validate record without inserting it."""
        return check_record(self.validator, record)

    def insert(self, record: Mapping[str, Any]) -> None:
        """Append a record after validation; raises ValidationError when rejected."""
        result = self.check(record)
        if not result.ok:
            logger.log_validation_error("insert", self.name, result.issues, [dict(record)])
            raise result.error()

        with self._lock:
            self._records = self._records + (dict(record),)
        logger.log_table_operation("insert", self.name, count=len(self._records))

    def find(self, options: Union[QueryOptions, Mapping[str, Any], None] = None) -> List[Record]:
        """Return the records selected by the query pipeline (filter, sort, offset, limit)."""
        with self._lock:
            snapshot = self._records
        results = [dict(record) for record in execute(snapshot, options)]
        logger.debug(f"table.find on {self.name or '<anonymous>'} returned {len(results)} record(s)")
        return results

    def all(self) -> List[Record]:
        """Every record in insertion order, as a copy."""
        with self._lock:
            snapshot = self._records
        return [dict(record) for record in snapshot]

    def count(self, where: WhereLike = None) -> int:
        clause = _where(where)
        with self._lock:
            snapshot = self._records
        if clause is None:
            return len(snapshot)
        return sum(1 for record in snapshot if matches(record, clause))

    def delete(self, where: WhereLike = None) -> None:
        """Remove every record matching where; no clause empties the table."""
        clause = _where(where)
        with self._lock:
            before = len(self._records)
            if clause is None:
                self._records = ()
            else:
                self._records = tuple(record for record in self._records if not matches(record, clause))
            removed = before - len(self._records)
        logger.log_table_operation("delete", self.name, removed=removed)

    def update(self, where: WhereLike, patch: Mapping[str, Any]) -> None:
        """Merge patch over every matching record in place of the original.

        Only the patch fields are validated, since a patch is a partial record.
        """
        result = check_patch(self.validator, patch)
        if not result.ok:
            logger.log_validation_error("update", self.name, result.issues, [dict(patch)])
            raise result.error()

        clause = _where(where)
        changes = dict(patch)
        with self._lock:
            updated = 0
            records = []
            for record in self._records:
                if clause is None or matches(record, clause):
                    record = {**record, **changes}
                    updated += 1
                records.append(record)
            self._records = tuple(records)
        logger.log_table_operation("update", self.name, updated=updated)

    def load(self, records: Sequence[Mapping[str, Any]]) -> None:
        """Append a batch of records; the whole batch is rejected if any record fails validation."""
        batch = [dict(record) for record in records]
        result = check_batch(self.validator, batch)
        if not result.ok:
            logger.log_validation_error("load", self.name, result.issues, batch)
            raise result.error()

        with self._lock:
            self._records = self._records + tuple(batch)
        logger.log_table_operation("load", self.name, loaded=len(batch), count=len(self._records))


def table(validator: Any = None, name: Optional[str] = None) -> Table:
    """Create a new empty table."""
    return Table(validator=validator, name=name)
