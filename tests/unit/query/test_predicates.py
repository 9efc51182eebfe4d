# tests/unit/query/test_predicates.py
"""Tests for the read-filter DSL parser."""

from __future__ import annotations

import pytest

from docstore.core.exceptions import InvalidInputError
from docstore.query.predicates import (
    Comparison,
    Condition,
    Query,
    Simple,
    is_query_spec,
    parse_query,
    to_bind_value,
)
from docstore.schema.types import BindType, BindValue


class TestToBindValue:
    """Tests for expected value normalization."""

    def test_bare_value_binds_as_string(self):
        """Untyped expected values get the string tag."""
        assert to_bind_value(20) == BindValue(BindType.STRING, 20)

    def test_wrapper_sets_tag(self):
        """{"val", "type"} wrappers carry their tag."""
        assert to_bind_value({"val": 20, "type": "i"}) == BindValue(BindType.INTEGER, 20)
        assert to_bind_value({"val": 1.5, "type": "d"}) == BindValue(BindType.FLOAT, 1.5)

    def test_wrapper_without_val_fails(self):
        """A wrapper with no value is invalid."""
        with pytest.raises(InvalidInputError):
            to_bind_value({"type": "i"})

    def test_bind_value_passes_through(self):
        """Already-normalized values are kept."""
        bv = BindValue(BindType.FLOAT, 2.0)
        assert to_bind_value(bv) is bv


class TestParseQuery:
    """Tests for the mapping and list forms."""

    def test_scalar_entries_are_simple(self):
        """attribute: value becomes a Simple predicate joined by AND."""
        query = parse_query({"firstname": "Joe", "lastname": "Doe"})
        assert query.predicates == [Simple("firstname", "Joe"), Simple("lastname", "Doe")]
        assert query.where_keyword == "WHERE"

    def test_where_key_overrides_keyword(self):
        """The 'where' pseudo-key is not a predicate."""
        query = parse_query({"where": "HAVING", "n": 1})
        assert query.where_keyword == "HAVING"
        assert len(query) == 1

    def test_condition_entry(self):
        """A mapping with a string condition becomes a Condition."""
        query = parse_query(
            {"age": {"condition": "BETWEEN ? AND ?", "expected": [18, {"val": 30, "type": "i"}],
                     "nextOperator": "OR"}}
        )
        (pred,) = query.predicates
        assert isinstance(pred, Condition)
        assert pred.condition == "BETWEEN ? AND ?"
        assert pred.expected == [
            BindValue(BindType.STRING, 18),
            BindValue(BindType.INTEGER, 30),
        ]
        assert pred.next_operator == "OR"

    def test_condition_single_expected_is_wrapped(self):
        """A non-list expected value becomes a one-item list."""
        query = parse_query({"age": {"condition": "> ?", "expected": 5}})
        assert query.predicates[0].expected == [BindValue(BindType.STRING, 5)]

    def test_comparison_entry(self):
        """A mapping without a condition becomes a Comparison."""
        query = parse_query({"city": {"expected": "Paris", "whereOperator": "<>"}})
        (pred,) = query.predicates
        assert isinstance(pred, Comparison)
        assert pred.operator == "<>"
        assert pred.expected == BindValue(BindType.STRING, "Paris")
        assert pred.inline is False

    def test_prepare_false_is_inline(self):
        """prepare: False keeps the expected value out of the bind list."""
        query = parse_query({"age": {"expected": 21, "whereOperator": ">", "prepare": False}})
        pred = query.predicates[0]
        assert pred.inline is True
        assert pred.expected == 21

    def test_typed_value_without_condition_is_simple(self):
        """{"val", "type"} on its own is an equality test with that tag."""
        query = parse_query({"age": {"val": 26, "type": "i"}})
        assert query.predicates == [Simple("age", BindValue(BindType.INTEGER, 26))]

    def test_list_form_takes_attribute_from_entry(self):
        """Integer keys read the attribute from the entry."""
        query = parse_query(
            [
                {"attribute": "age", "condition": "> ?", "expected": 20, "nextOperator": "AND"},
                {"attribute": "age", "condition": "< ?", "expected": 30},
            ]
        )
        assert [p.attribute for p in query.predicates] == ["age", "age"]

    def test_list_entry_without_attribute_fails(self):
        """Integer keys need an attribute in the entry."""
        with pytest.raises(InvalidInputError, match="no attribute"):
            parse_query([{"condition": "> ?"}])

    def test_empty_query_fails(self):
        """A query with no predicates is rejected."""
        with pytest.raises(InvalidInputError, match="no predicates"):
            parse_query({})
        with pytest.raises(InvalidInputError):
            parse_query({"where": "WHERE"})

    def test_query_passes_through(self):
        """A Query is returned as is."""
        query = Query([Simple("a", 1)])
        assert parse_query(query) is query

    def test_unsupported_spec_fails(self):
        """Only mappings, lists and Query objects describe queries."""
        with pytest.raises(InvalidInputError):
            parse_query("name = 'Joe'")


class TestIsQuerySpec:
    """Tests for get() child dispatch."""

    def test_collections_are_queries(self):
        """Mappings, lists and Query objects select a filtered read."""
        assert is_query_spec({"a": 1})
        assert is_query_spec([Simple("a", 1)])
        assert is_query_spec(Query())

    def test_scalars_are_not(self):
        """Ids and flags are not queries."""
        assert not is_query_spec("u1")
        assert not is_query_spec(True)
        assert not is_query_spec(None)
