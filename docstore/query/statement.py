# docstore/query/statement.py
"""Rendered SQL statement plus its positional bind values."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from docstore.schema.types import BindValue


@dataclass
class Statement:
    """
    SQL text with `?` placeholders and the values bound to them, in order.

    Identifiers are already quoted into `sql`; only values are parameters.
    """

    sql: str
    params: list[BindValue] = field(default_factory=list)

    @property
    def bind_types(self) -> str:
        """Tag string of the parameters, e.g. "ssi"."""
        return "".join(p.bind_type.value for p in self.params)

    @property
    def values(self) -> list[Any]:
        return [p.value for p in self.params]

    def __str__(self) -> str:
        return self.sql


__all__ = ["Statement"]
