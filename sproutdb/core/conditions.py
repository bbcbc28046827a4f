"""
Condition evaluation - decides whether one field value satisfies one condition.
A condition is either a literal (strict equality) or a dict of $-operators.
"""

import re
from numbers import Real
from typing import Any, Callable, Dict, Optional

from .errors import QueryError
from .schema import MISSING


def _domain(value: Any) -> Optional[str]:
    """Name of the ordering domain a value belongs to, or None if it has none."""
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, Real):
        return "number"
    if isinstance(value, str):
        return "str"
    return None


def strict_equals(left: Any, right: Any) -> bool:
    """Equality without coercion: booleans never equal numbers, MISSING equals nothing."""
    if left is MISSING or right is MISSING:
        return False
    if isinstance(left, bool) != isinstance(right, bool):
        return False
    return left == right


def _ordered(compare: Callable[[Any, Any], bool]) -> Callable[[Any, Any], bool]:
    def check(value: Any, operand: Any) -> bool:
        domain = _domain(value)
        if domain is None or domain != _domain(operand):
            return False
        return compare(value, operand)

    return check


def _members(operator: str, operand: Any) -> Any:
    if not isinstance(operand, (list, tuple, set, frozenset)):
        raise QueryError(f"{operator} requires a list, got {type(operand).__name__}")
    return operand


def _contains(value: Any, operand: Any) -> bool:
    return any(strict_equals(value, item) for item in _members("$in", operand))


def _excludes(value: Any, operand: Any) -> bool:
    return not any(strict_equals(value, item) for item in _members("$nin", operand))


def as_text(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _regex(value: Any, operand: Any) -> bool:
    if value is MISSING:
        return False
    if isinstance(operand, re.Pattern):
        pattern = operand
    elif isinstance(operand, str):
        pattern = re.compile(operand)
    else:
        raise QueryError(f"$regex requires a pattern or string, got {type(operand).__name__}")
    return pattern.search(as_text(value)) is not None


_CHECKS: Dict[str, Callable[[Any, Any], bool]] = {
    "$gt": _ordered(lambda value, operand: value > operand),
    "$gte": _ordered(lambda value, operand: value >= operand),
    "$lt": _ordered(lambda value, operand: value < operand),
    "$lte": _ordered(lambda value, operand: value <= operand),
    "$ne": lambda value, operand: not strict_equals(value, operand),
    "$in": _contains,
    "$nin": _excludes,
    "$regex": _regex,
}


def is_operator_set(condition: Any) -> bool:
    return isinstance(condition, dict) and any(
        isinstance(key, str) and key.startswith("$") for key in condition
    )


def evaluate(field_value: Any, condition: Any) -> bool:
    """Return True when field_value satisfies condition.

    Operators are applied in the order they appear in the condition and the
    first failing one ends the evaluation. A dict without any $-keys is
    compared as a literal nested document.
    """
    if not is_operator_set(condition):
        return strict_equals(field_value, condition)

    for operator, operand in condition.items():
        check = _CHECKS.get(operator)
        if check is None:
            raise QueryError(f"Unknown query operator: {operator}")
        if not check(field_value, operand):
            return False
    return True
