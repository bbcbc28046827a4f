"""
Condition evaluator tests - literal equality and $-operator semantics for one field value.
"""

import re

import pytest

from sproutdb.core.conditions import as_text, evaluate, is_operator_set, strict_equals
from sproutdb.core.errors import QueryError
from sproutdb.core.schema import MISSING


class TestLiteralEquality:
    """Test conditions given as plain values."""

    def test_equal_values_match(self):
        """Test that equal literals match."""
        assert evaluate("Alice", "Alice") is True
        assert evaluate(30, 30) is True
        assert evaluate(None, None) is True

    def test_different_values_do_not_match(self):
        """Test that different literals do not match."""
        assert evaluate("Alice", "Bob") is False
        assert evaluate(30, 31) is False

    def test_no_coercion_between_types(self):
        """Strings never equal numbers and booleans never equal numbers."""
        assert evaluate("1", 1) is False
        assert evaluate(True, 1) is False
        assert evaluate(0, False) is False

    def test_int_and_float_are_the_same_number(self):
        """Test that 1 and 1.0 compare equal."""
        assert evaluate(1, 1.0) is True

    def test_missing_field_never_equals_anything(self):
        """Test that a missing field equals no literal."""
        assert evaluate(MISSING, None) is False
        assert evaluate(MISSING, "Alice") is False

    def test_dict_without_operators_is_nested_document_equality(self):
        """Test that a plain dict condition compares the whole value."""
        assert evaluate({"city": "Oslo", "zip": "0150"}, {"city": "Oslo", "zip": "0150"}) is True
        assert evaluate({"city": "Oslo"}, {"city": "Bergen"}) is False


class TestComparisonOperators:
    """Test $gt, $gte, $lt and $lte."""

    @pytest.mark.parametrize("value,condition,expected", [
        (30, {"$gt": 25}, True),
        (25, {"$gt": 25}, False),
        (25, {"$gte": 25}, True),
        (24, {"$gte": 25}, False),
        (20, {"$lt": 25}, True),
        (25, {"$lt": 25}, False),
        (25, {"$lte": 25}, True),
        (26, {"$lte": 25}, False),
        ("banana", {"$gt": "apple"}, True),
        (2.5, {"$gt": 2}, True),
    ])
    def test_natural_ordering(self, value, condition, expected):
        """Test the ordering operators on numbers and strings."""
        assert evaluate(value, condition) is expected

    def test_range_combines_operators(self):
        """Test that several operators in one condition must all hold."""
        assert evaluate(30, {"$gte": 25, "$lt": 35}) is True
        assert evaluate(35, {"$gte": 25, "$lt": 35}) is False

    def test_cross_type_comparison_is_false(self):
        """Test that ordering across value types is always false."""
        assert evaluate("30", {"$gt": 1}) is False
        assert evaluate(30, {"$lt": "z"}) is False
        assert evaluate(True, {"$gt": 0}) is False
        assert evaluate(None, {"$lt": 10}) is False

    def test_missing_field_fails_comparisons(self):
        """Test that a missing field fails every ordering operator."""
        for operator in ("$gt", "$gte", "$lt", "$lte"):
            assert evaluate(MISSING, {operator: 0}) is False


class TestInequalityAndMembership:
    """Test $ne, $in and $nin."""

    def test_ne(self):
        """Test $ne on plain values."""
        assert evaluate("Alice", {"$ne": "Bob"}) is True
        assert evaluate("Alice", {"$ne": "Alice"}) is False

    def test_ne_is_strict(self):
        """Test that $ne treats True and 1 as different."""
        assert evaluate(1, {"$ne": True}) is True

    def test_ne_on_missing_field_matches(self):
        """Test that $ne matches a missing field."""
        assert evaluate(MISSING, {"$ne": "Alice"}) is True

    def test_in(self):
        """Test $in membership."""
        assert evaluate("admin", {"$in": ["admin", "owner"]}) is True
        assert evaluate("guest", {"$in": ["admin", "owner"]}) is False

    def test_in_uses_strict_equality(self):
        """Test that $in does not treat True as 1."""
        assert evaluate(1, {"$in": [True, "1"]}) is False

    def test_nin(self):
        """Test $nin membership."""
        assert evaluate("guest", {"$nin": ["admin", "owner"]}) is True
        assert evaluate("admin", {"$nin": ["admin", "owner"]}) is False

    def test_missing_field(self):
        """Test $in and $nin against a missing field."""
        assert evaluate(MISSING, {"$in": ["a"]}) is False
        assert evaluate(MISSING, {"$nin": ["a"]}) is True

    def test_in_requires_a_list(self):
        """Test that a non-list operand to $in is rejected."""
        with pytest.raises(QueryError):
            evaluate("a", {"$in": "abc"})


class TestRegexOperator:
    """Test $regex with source text and compiled patterns."""

    def test_source_text(self):
        """Test $regex with a pattern string."""
        assert evaluate("alice@example.com", {"$regex": r"@example\.com$"}) is True
        assert evaluate("alice@test.org", {"$regex": r"@example\.com$"}) is False

    def test_search_semantics(self):
        """The pattern may match anywhere in the text."""
        assert evaluate("Charlie", {"$regex": "arl"}) is True

    def test_compiled_pattern(self):
        """Test $regex with a compiled pattern."""
        assert evaluate("ALICE", {"$regex": re.compile("alice", re.IGNORECASE)}) is True

    def test_value_is_coerced_to_text(self):
        """Test that non-string values are matched as text."""
        assert evaluate(12345, {"$regex": r"^\d+$"}) is True
        assert evaluate(True, {"$regex": "^true$"}) is True
        assert evaluate(None, {"$regex": "^null$"}) is True

    def test_missing_field_never_matches(self):
        """Test that $regex never matches a missing field."""
        assert evaluate(MISSING, {"$regex": ".*"}) is False

    def test_invalid_pattern_propagates(self):
        """Test that an invalid pattern raises re.error."""
        with pytest.raises(re.error):
            evaluate("abc", {"$regex": "("})


class TestMalformedConditions:
    """Test operator sets the evaluator refuses."""

    def test_unknown_operator_raises(self):
        """Test that an unknown $ operator raises QueryError."""
        with pytest.raises(QueryError) as exc_info:
            evaluate(1, {"$between": [0, 2]})
        assert "$between" in str(exc_info.value)

    def test_first_failing_operator_short_circuits(self):
        """A failing operator ends evaluation before a later malformed one is reached."""
        assert evaluate(1, {"$gt": 5, "$in": "not-a-list"}) is False


def test_helpers():
    """Test the small helpers used by the evaluator."""
    assert is_operator_set({"$gt": 1}) is True
    assert is_operator_set({"city": "Oslo"}) is False
    assert is_operator_set("Oslo") is False
    assert strict_equals(MISSING, MISSING) is False
    assert as_text(False) == "false"
