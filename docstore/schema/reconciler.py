# docstore/schema/reconciler.py
"""
Schema reconciliation.

Makes sure a table exists and every attribute of a write has a backing
column before the write runs. Evolution is additive only: columns are added,
never altered or dropped. Nothing here is transactional; a failure part way
through leaves whatever was already created in place.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Union

from docstore.logging.logger import get_logger
from docstore.logging.tags import SCHEMA
from docstore.query import builder
from docstore.schema.types import Attribute
from docstore.storage.base import Backend, count_rows, run_statement

logger = get_logger(__name__)


@dataclass(frozen=True)
class ColumnSpec:
    """A column a write needs: name plus the type to create it with."""

    name: str
    type: str


ColumnLike = Union[ColumnSpec, Attribute, tuple]


def _as_spec(column: ColumnLike) -> ColumnSpec:
    if isinstance(column, ColumnSpec):
        return column
    if isinstance(column, Attribute):
        return ColumnSpec(column.name, column.column_type)
    name, type_ = column
    return ColumnSpec(name, type_)


def table_exists(backend: Backend, table: str) -> bool:
    """True if the metadata lookup finds the table."""
    return count_rows(backend, builder.table_exists(backend, table)) > 0


def column_exists(backend: Backend, table: str, column: str) -> bool:
    """True if the metadata lookup finds the column on the table."""
    return count_rows(backend, builder.column_exists(backend, table, column)) > 0


def ensure_table(backend: Backend, table: str) -> None:
    """
    Create the table with only its identity column if it does not exist.

    Raises:
        StatementPrepareError, StatementExecuteError: If the DDL fails
    """
    result = run_statement(backend, builder.create_table(backend, table))
    result.free()


def ensure_columns(
    backend: Backend,
    table: str,
    columns: Sequence[ColumnLike],
) -> list[str]:
    """
    Add every column the table is missing.

    Existence is checked per column in caller order; all missing columns are
    added together. Existing columns keep their type whatever the write asks
    for.

    Returns:
        Names of the columns that were added, in caller order
    """
    missing: list[ColumnSpec] = []
    seen: set[str] = set()
    for column in columns:
        spec = _as_spec(column)
        if spec.name in seen:
            continue
        seen.add(spec.name)
        if not column_exists(backend, table, spec.name):
            missing.append(spec)

    if not missing:
        return []

    for statement in builder.add_columns(backend, table, [(c.name, c.type) for c in missing]):
        run_statement(backend, statement).free()

    added = [c.name for c in missing]
    logger.info(
        f"{SCHEMA} Added {len(added)} column(s) to '{table}': "
        + ", ".join(f"{c.name} {c.type}" for c in missing)
    )
    return added


def reconcile(backend: Backend, table: str, attributes: Sequence[Attribute]) -> list[str]:
    """Ensure the table, then the columns for a write's attributes."""
    ensure_table(backend, table)
    if not attributes:
        return []
    return ensure_columns(backend, table, attributes)


__all__ = [
    "ColumnSpec",
    "table_exists",
    "column_exists",
    "ensure_table",
    "ensure_columns",
    "reconcile",
]
