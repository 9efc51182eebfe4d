# docstore/query/predicates.py
"""
Read-filter DSL.

A filtered read is a Query: an ordered list of predicates plus the keyword
that introduces them (normally WHERE). Each predicate renders one clause and
is followed by its own joining operator; the joiner after the last clause is
dropped.

Three predicate kinds:

    Simple("name", "Joe")                      -> "name" = ?         (joined by AND)
    Comparison("age", 21, operator=">=")       -> "age">=?
    Comparison("age", 21, ">=", inline=True)   -> "age">=21          (value not bound)
    Condition("age", "BETWEEN ? AND ?", [18, 30])
                                               -> "age" BETWEEN ? AND ?

Callers can also describe a query as a mapping, parsed by parse_query():

    {
        "where": "WHERE",                       # optional keyword override
        "firstname": "Joe",                     # Simple
        "age": {"condition": "> ?", "expected": [{"val": 20, "type": "i"}],
                "nextOperator": "OR"},          # Condition
        "city": {"expected": "Paris", "whereOperator": "<>"},   # Comparison
    }
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence, Union

from docstore.core.exceptions import InvalidInputError
from docstore.schema.types import BindType, BindValue

WHERE = "WHERE"
AND = "AND"


@dataclass
class Simple:
    """Equality test bound as a parameter, joined with AND by default."""

    attribute: str
    value: Any
    next_operator: str = AND


@dataclass
class Comparison:
    """
    `attribute <operator> value`.

    With inline=True the value is written into the SQL text instead of
    being bound. Without an expected value only the attribute is emitted.
    """

    attribute: str
    expected: Any = None
    operator: str = "="
    inline: bool = False
    next_operator: str = ""


@dataclass
class Condition:
    """Free-form condition fragment with its own `?` placeholders."""

    attribute: str
    condition: str
    expected: list[Any] = field(default_factory=list)
    next_operator: str = ""


Predicate = Union[Simple, Comparison, Condition]


@dataclass
class Query:
    """Ordered predicates plus the keyword that introduces them."""

    predicates: list[Predicate] = field(default_factory=list)
    where_keyword: str = WHERE

    def __len__(self) -> int:
        return len(self.predicates)


# =============================================================================
# Value Helpers
# =============================================================================


def to_bind_value(value: Any) -> BindValue:
    """
    Normalize an expected value.

    Accepts a BindValue, a wrapper {"val": v, "type": "i"|"d"|"s"}, or a bare
    value, which is bound as a string.
    """
    if isinstance(value, BindValue):
        return value
    if isinstance(value, Mapping):
        if "val" not in value:
            raise InvalidInputError("Expected value wrapper is missing 'val'")
        return BindValue(BindType.parse(value.get("type", BindType.STRING)), value["val"])
    return BindValue(BindType.STRING, value)


def literal(value: Any) -> str:
    """Text written for an inline (unbound) value."""
    if isinstance(value, BindValue):
        value = value.value
    elif isinstance(value, Mapping):
        value = value.get("val")
    return str(value)


# =============================================================================
# Mapping DSL
# =============================================================================


def parse_query(spec: Union[Query, Mapping[Any, Any], Sequence[Any]]) -> Query:
    """
    Build a Query from a Query, a predicate list or the mapping DSL.

    Raises:
        InvalidInputError: If an entry cannot be turned into a predicate
    """
    if isinstance(spec, Query):
        return spec

    if isinstance(spec, Mapping):
        items = list(spec.items())
    elif isinstance(spec, (list, tuple)):
        items = list(enumerate(spec))
    else:
        raise InvalidInputError(f"Cannot build a query from {type(spec).__name__}")

    query = Query()
    for key, value in items:
        if key == "where":
            if not isinstance(value, str):
                raise InvalidInputError("The 'where' keyword override must be a string")
            query.where_keyword = value
            continue
        query.predicates.append(_parse_predicate(key, value))

    if not query.predicates:
        raise InvalidInputError("Query has no predicates")
    return query


def _parse_predicate(key: Any, value: Any) -> Predicate:
    if isinstance(value, (Simple, Comparison, Condition)):
        return value

    if isinstance(key, str):
        attribute = key
    elif isinstance(value, Mapping) and isinstance(value.get("attribute"), str):
        attribute = value["attribute"]
    else:
        raise InvalidInputError(f"Predicate {key!r} has no attribute name")

    if not isinstance(value, Mapping):
        return Simple(attribute, value)

    # {"val": 26, "type": "i"} as a typed equality value
    if "val" in value and "expected" not in value and "condition" not in value:
        return Simple(attribute, to_bind_value(value))

    next_operator = value.get("nextOperator")
    if not isinstance(next_operator, str):
        next_operator = ""

    condition = value.get("condition")
    if isinstance(condition, str):
        expected = value.get("expected")
        if expected is None:
            expected = []
        elif not isinstance(expected, (list, tuple)):
            expected = [expected]
        return Condition(
            attribute,
            condition,
            expected=[to_bind_value(v) for v in expected],
            next_operator=next_operator,
        )

    operator = value.get("whereOperator")
    if not isinstance(operator, str):
        operator = "="
    inline = value.get("prepare") is False
    expected = value.get("expected")
    if expected is not None and not inline:
        expected = to_bind_value(expected)
    return Comparison(
        attribute,
        expected=expected,
        operator=operator,
        inline=inline,
        next_operator=next_operator,
    )


def is_query_spec(child: Any) -> bool:
    """True if a get() child argument describes a filtered read."""
    return isinstance(child, (Query, Mapping, list, tuple))


__all__ = [
    "WHERE",
    "AND",
    "Simple",
    "Comparison",
    "Condition",
    "Predicate",
    "Query",
    "to_bind_value",
    "literal",
    "parse_query",
    "is_query_spec",
]
