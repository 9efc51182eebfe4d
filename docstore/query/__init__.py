# docstore/query/__init__.py
"""
Statement building, the read-filter DSL and result shaping.

Usage:
    from docstore.query import Simple, Condition, Query, builder

    query = Query([Simple("name", "Joe"), Condition("age", "> ?", [21])])
    statement = builder.select_where(backend, "users", query, ["name"])
"""

from docstore.query import builder
from docstore.query.predicates import (
    AND,
    WHERE,
    Comparison,
    Condition,
    Predicate,
    Query,
    Simple,
    is_query_spec,
    parse_query,
    to_bind_value,
)
from docstore.query.shaping import shape_ids, shape_keyed, shape_rows
from docstore.query.statement import Statement

__all__ = [
    "builder",
    "AND",
    "WHERE",
    "Comparison",
    "Condition",
    "Predicate",
    "Query",
    "Simple",
    "Statement",
    "is_query_spec",
    "parse_query",
    "to_bind_value",
    "shape_ids",
    "shape_keyed",
    "shape_rows",
]
