# docstore/query/shaping.py
"""
Turn fetched rows into the values get() returns.

Every shape maps an empty result to None ("no data").
"""

from __future__ import annotations

from typing import Any, Optional, Sequence

Row = dict[str, Any]


def shape_ids(rows: list[Row]) -> Optional[list[Any]]:
    """[id, ...] in retrieval order."""
    if not rows:
        return None
    return [row["id"] for row in rows]


def shape_keyed(rows: list[Row]) -> Optional[dict[Any, Row]]:
    """{id: row} in retrieval order."""
    if not rows:
        return None
    return {row["id"]: row for row in rows}


def shape_rows(rows: list[Row], columns: Optional[Sequence[str]] = None) -> Any:
    """
    Shape a by-id or filtered read.

    One row with exactly one projected column collapses to that column's
    value; one row otherwise is the row itself. Several rows come back as a
    list, of values when one column is projected, of rows otherwise.
    """
    if not rows:
        return None

    single_column = columns[0] if columns and len(columns) == 1 else None
    if len(rows) == 1:
        row = rows[0]
        if single_column is not None:
            return row.get(single_column)
        return row

    if single_column is not None:
        return [row.get(single_column) for row in rows]
    return list(rows)


__all__ = ["shape_ids", "shape_keyed", "shape_rows"]
