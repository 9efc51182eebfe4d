# docstore/query/builder.py
"""
Statement construction.

Every function is a pure translation from a logical request to a Statement.
Table and column names are quoted through the backend's escape primitive
because placeholders cannot stand in for identifiers; values are always
bound, except inline Comparison values.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Sequence

from docstore.core.exceptions import InvalidInputError
from docstore.query.predicates import (
    Comparison,
    Condition,
    Predicate,
    Query,
    Simple,
    literal,
    to_bind_value,
)
from docstore.query.statement import Statement
from docstore.schema.types import TYPE_ID, Attribute, BindType, BindValue

if TYPE_CHECKING:
    from docstore.storage.base import Backend

ID_COLUMN = "id"


def _id_value(child: str) -> BindValue:
    return BindValue(BindType.STRING, child)


def _projection(backend: "Backend", columns: Optional[Sequence[str]], with_id: bool) -> str:
    """Column list for SELECT: `*`, or the named columns (led by id if asked)."""
    if not columns:
        return "*"
    names = [c for c in columns if not (with_id and c == ID_COLUMN)]
    if with_id:
        names.insert(0, ID_COLUMN)
    return ", ".join(backend.escape(c) for c in names)


# =============================================================================
# Schema Statements
# =============================================================================


def create_table(backend: "Backend", table: str) -> Statement:
    """Create-if-absent with only the identity column."""
    return Statement(
        f"CREATE TABLE IF NOT EXISTS {backend.escape(table)} "
        f"({backend.escape(ID_COLUMN)} {TYPE_ID} PRIMARY KEY)"
    )


def add_columns(
    backend: "Backend",
    table: str,
    columns: Sequence[tuple[str, str]],
) -> list[Statement]:
    """
    Additive ALTER for missing columns.

    One statement adding every column where the dialect allows several
    ADD COLUMN clauses, otherwise one statement per column.
    """
    if not columns:
        return []
    table_sql = backend.escape(table)
    clauses = [f"ADD COLUMN {backend.escape(name)} {type_}" for name, type_ in columns]
    if getattr(backend, "multi_column_alter", True):
        return [Statement(f"ALTER TABLE {table_sql} " + ", ".join(clauses))]
    return [Statement(f"ALTER TABLE {table_sql} {clause}") for clause in clauses]


def table_exists(backend: "Backend", table: str) -> Statement:
    return Statement(backend.table_exists_sql, [BindValue(BindType.STRING, table)])


def column_exists(backend: "Backend", table: str, column: str) -> Statement:
    return Statement(
        backend.column_exists_sql,
        [BindValue(BindType.STRING, table), BindValue(BindType.STRING, column)],
    )


# =============================================================================
# Write Statements
# =============================================================================


def insert_id(backend: "Backend", table: str, child: str) -> Statement:
    return Statement(
        f"INSERT INTO {backend.escape(table)} ({backend.escape(ID_COLUMN)}) VALUES (?)",
        [_id_value(child)],
    )


def update_attributes(
    backend: "Backend",
    table: str,
    child: str,
    attributes: Sequence[Attribute],
) -> Statement:
    """
    One UPDATE setting every attribute, bound in input order, id last.

    Raises:
        InvalidInputError: If there is nothing to set
    """
    if not attributes:
        raise InvalidInputError("Update needs at least one attribute")
    assignments = ", ".join(f"{backend.escape(a.name)} = ?" for a in attributes)
    return Statement(
        f"UPDATE {backend.escape(table)} SET {assignments} "
        f"WHERE {backend.escape(ID_COLUMN)} = ?",
        [a.bind_value for a in attributes] + [_id_value(child)],
    )


# =============================================================================
# Read Statements
# =============================================================================


def select_by_id(
    backend: "Backend",
    table: str,
    child: str,
    columns: Optional[Sequence[str]] = None,
) -> Statement:
    """All columns, or id plus the projected columns, of one document."""
    return Statement(
        f"SELECT {_projection(backend, columns, with_id=True)} FROM {backend.escape(table)} "
        f"WHERE {backend.escape(ID_COLUMN)} = ?",
        [_id_value(child)],
    )


def select_id(backend: "Backend", table: str, child: str) -> Statement:
    """Existence probe for one id."""
    return select_by_id(backend, table, child, [ID_COLUMN])


def select_ids(backend: "Backend", table: str) -> Statement:
    id_sql = backend.escape(ID_COLUMN)
    return Statement(f"SELECT {id_sql} FROM {backend.escape(table)}")


def select_any(backend: "Backend", table: str) -> Statement:
    """Probe for at least one row in a table."""
    id_sql = backend.escape(ID_COLUMN)
    return Statement(f"SELECT {id_sql} FROM {backend.escape(table)} LIMIT 1")


def select_all(
    backend: "Backend",
    table: str,
    columns: Optional[Sequence[str]] = None,
) -> Statement:
    return Statement(
        f"SELECT {_projection(backend, columns, with_id=True)} FROM {backend.escape(table)}"
    )


def select_where(
    backend: "Backend",
    table: str,
    query: Query,
    columns: Optional[Sequence[str]] = None,
) -> Statement:
    """
    SELECT <columns> FROM <table> <where keyword> <predicates>.

    The projection is exactly the named columns; id is not added.
    """
    predicate_sql, params = render_predicates(backend, query)
    parts = [
        f"SELECT {_projection(backend, columns, with_id=False)} FROM {backend.escape(table)}"
    ]
    keyword = query.where_keyword.strip()
    if keyword:
        parts.append(keyword)
    parts.append(predicate_sql)
    return Statement(" ".join(parts), params)


# =============================================================================
# Predicate Folding
# =============================================================================


def render_predicates(backend: "Backend", query: Query) -> tuple[str, list[BindValue]]:
    """
    Fold predicates left to right into SQL text and ordered bind values.

    Each clause is followed by its predicate's joiner; the last joiner is
    dropped so the text never ends in an operator.

    Raises:
        InvalidInputError: If the query has no predicates
    """
    if not query.predicates:
        raise InvalidInputError("Query has no predicates")

    parts: list[str] = []
    params: list[BindValue] = []
    last = len(query.predicates) - 1
    for i, predicate in enumerate(query.predicates):
        clause, values = _render(backend, predicate)
        parts.append(clause)
        params.extend(values)
        joiner = predicate.next_operator.strip()
        if i < last and joiner:
            parts.append(joiner)
    return " ".join(parts), params


def _render(backend: "Backend", predicate: Predicate) -> tuple[str, list[BindValue]]:
    attribute = backend.escape(predicate.attribute)

    if isinstance(predicate, Simple):
        return f"{attribute} = ?", [to_bind_value(predicate.value)]

    if isinstance(predicate, Condition):
        fragment = predicate.condition.strip()
        separator = "" if fragment.startswith("=") else " "
        clause = f"{attribute}{separator}{fragment}" if fragment else attribute
        return clause, [to_bind_value(v) for v in predicate.expected]

    if isinstance(predicate, Comparison):
        if predicate.expected is None:
            return attribute, []
        if predicate.inline:
            return f"{attribute}{predicate.operator}{literal(predicate.expected)}", []
        return f"{attribute}{predicate.operator}?", [to_bind_value(predicate.expected)]

    raise InvalidInputError(f"Unknown predicate type {type(predicate).__name__}")


__all__ = [
    "ID_COLUMN",
    "create_table",
    "add_columns",
    "table_exists",
    "column_exists",
    "insert_id",
    "update_attributes",
    "select_by_id",
    "select_id",
    "select_ids",
    "select_any",
    "select_all",
    "select_where",
    "render_predicates",
]
