"""
Database registry - maps table names to Table stores.
"""

import threading
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

from ..util.logging import logger
from .errors import TableExistsError, TableNotFoundError
from .table import Table


class Database:
    """Registry of named tables.

    Tables are registered by name at construction or later through
    create_table; the registry owns its tables and tables know nothing about it.
    """

    def __init__(self, tables: Optional[Mapping[str, Table]] = None):
        self._tables: Dict[str, Table] = {}
        self._lock = threading.RLock()
        for name, existing in (tables or {}).items():
            self.add_table(name, existing)

    def __contains__(self, name: object) -> bool:
        return name in self._tables

    def __getitem__(self, name: str) -> Table:
        return self.get_table(name)

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __len__(self) -> int:
        return len(self._tables)

    def add_table(self, name: str, new_table: Table) -> Table:
        """Register an existing Table under name."""
        if not name or not isinstance(name, str):
            raise ValueError("Table name is required")
        with self._lock:
            if name in self._tables:
                raise TableExistsError(name)
            if new_table.name is None:
                new_table.name = name
            self._tables[name] = new_table
        logger.log_table_operation("create", name)
        return new_table

    def create_table(self, name: str, validator: Any = None) -> Table:
        """Create and register an empty table; raises TableExistsError if the name is taken."""
        return self.add_table(name, Table(validator=validator, name=name))

    def get_table(self, name: str) -> Table:
        try:
            return self._tables[name]
        except KeyError:
            raise TableNotFoundError(name) from None

    def names(self) -> List[str]:
        with self._lock:
            return list(self._tables)

    def items(self) -> List[Tuple[str, Table]]:
        with self._lock:
            return list(self._tables.items())

    def record_counts(self) -> Dict[str, int]:
        return {name: len(existing) for name, existing in self.items()}

    def total_records(self) -> int:
        return sum(self.record_counts().values())

    def load_seed(self, seed: Mapping[str, Sequence[Mapping[str, Any]]]) -> None:
        """Load seed records, creating any table that is not registered yet."""
        for name, records in seed.items():
            with self._lock:
                target = self._tables.get(name)
                if target is None:
                    target = self.create_table(name)
            target.load(records)
        logger.info(f"Seeded {len(seed)} table(s): {', '.join(seed) or '-'}")


def create(tables: Optional[Mapping[str, Table]] = None) -> Database:
    """Create a new database from table definitions."""
    return Database(tables)
