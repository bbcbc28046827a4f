"""
Where-clause matching - field conditions ANDed together, optional OR branches.
"""

from typing import Any, Mapping, Union

from .conditions import evaluate
from .schema import MISSING, WhereClause


def matches(record: Mapping[str, Any], where: Union[WhereClause, Mapping[str, Any], None]) -> bool:
    """Return True when record satisfies where.

    None or an empty clause matches everything. An empty list of OR branches
    matches nothing, since no branch can succeed.
    """
    if where is None:
        return True
    clause = WhereClause.from_dict(where)

    for name, condition in clause.fields.items():
        if not evaluate(record.get(name, MISSING), condition):
            return False

    if clause.any_of is None:
        return True
    return any(matches(record, branch) for branch in clause.any_of)
