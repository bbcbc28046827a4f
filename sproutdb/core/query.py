"""
Query pipeline - filter, then stable multi-key sort, then offset, then limit.
"""

from functools import cmp_to_key
from numbers import Real
from typing import Any, List, Mapping, Sequence, Union

from .matcher import matches
from .schema import MISSING, QueryOptions, Record, SortClause

# Rank of each value family in the sort order; values in different families
# compare by rank alone.
_RANK_MISSING = 0
_RANK_NONE = 1
_RANK_BOOL = 2
_RANK_NUMBER = 3
_RANK_STR = 4
_RANK_OTHER = 5


def _rank(value: Any) -> int:
    if value is MISSING:
        return _RANK_MISSING
    if value is None:
        return _RANK_NONE
    if isinstance(value, bool):
        return _RANK_BOOL
    if isinstance(value, Real):
        return _RANK_NUMBER
    if isinstance(value, str):
        return _RANK_STR
    return _RANK_OTHER


def compare_values(left: Any, right: Any) -> int:
    """Total order over record values: -1, 0 or 1."""
    left_rank, right_rank = _rank(left), _rank(right)
    if left_rank != right_rank:
        return -1 if left_rank < right_rank else 1
    if left_rank in (_RANK_MISSING, _RANK_NONE):
        return 0
    if left_rank == _RANK_OTHER:
        left, right = repr(left), repr(right)
    if left < right:
        return -1
    if left > right:
        return 1
    return 0


def sort_records(records: Sequence[Record], sort: SortClause) -> List[Record]:
    """Stable sort by each key in turn; the first unequal key decides."""

    def compare(left: Record, right: Record) -> int:
        for key in sort:
            result = compare_values(left.get(key.field, MISSING), right.get(key.field, MISSING))
            if result:
                return -result if key.descending else result
        return 0

    return sorted(records, key=cmp_to_key(compare))


def execute(records: Sequence[Record], options: Union[QueryOptions, Mapping[str, Any], None] = None) -> List[Record]:
    """Run the query pipeline over records and return a new list.

    A limit of 0 means no limit.
    """
    options = QueryOptions.coerce(options)

    if options.where is None or options.where.is_empty():
        results = list(records)
    else:
        results = [record for record in records if matches(record, options.where)]

    if options.sort:
        results = sort_records(results, options.sort)

    if options.offset:
        results = results[options.offset:]

    if options.limit:
        results = results[:options.limit]

    return results
