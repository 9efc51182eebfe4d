# docstore/cli/ui.py
"""
Shared output helpers for the docstore CLI.

Usage:
    from docstore.cli.ui import ui, console

    ui.success("Wrote users/u1")
    ui.document({"id": "u1", "name": "Joe"})
"""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from rich.console import Console
from rich.markup import escape
from rich.table import Table

console = Console()


class UI:
    """Consistent styling for command output."""

    def print(self, msg: str, style: str = "") -> None:
        if style:
            console.print(f"[{style}]{msg}[/{style}]")
        else:
            console.print(msg)

    def success(self, msg: str) -> None:
        console.print(f"[green]✓[/green] {msg}")

    def error(self, msg: str) -> None:
        console.print(f"[red]✗[/red] {msg}")

    def warning(self, msg: str, detail: str = "") -> None:
        detail_str = f" [dim]({detail})[/dim]" if detail else ""
        console.print(f"[yellow]⚠[/yellow] {msg}{detail_str}")

    def info(self, msg: str) -> None:
        console.print(f"[dim]{msg}[/dim]")

    # -------------------------------------------------------------------------
    # Results
    # -------------------------------------------------------------------------

    def document(self, row: Mapping[str, Any], title: str = "") -> None:
        """One row as an attribute/value table."""
        table = Table(show_header=True, header_style="bold", title=title or None)
        table.add_column("Attribute", style="cyan")
        table.add_column("Value")
        for key, value in row.items():
            table.add_row(str(key), _cell(value))
        console.print(table)

    def rows(self, rows: Sequence[Mapping[str, Any]], title: str = "") -> None:
        """Several rows as one table, columns in first-seen order."""
        columns: list[str] = []
        for row in rows:
            for key in row:
                if key not in columns:
                    columns.append(key)

        table = Table(show_header=True, header_style="bold", title=title or None)
        for name in columns:
            table.add_column(name, style="cyan" if name == "id" else None)
        for row in rows:
            table.add_row(*(_cell(row.get(name)) for name in columns))
        console.print(table)

    def values(self, values: Sequence[Any]) -> None:
        for value in values:
            console.print(_cell(value))

    def result(self, result: Any) -> None:
        """Render whatever shape get() returned."""
        if result is None:
            self.info("No data")
        elif isinstance(result, Mapping):
            if result and all(isinstance(v, Mapping) for v in result.values()):
                self.rows(list(result.values()))
            else:
                self.document(result)
        elif isinstance(result, list):
            if result and all(isinstance(v, Mapping) for v in result):
                self.rows(result)
            else:
                self.values(result)
        else:
            console.print(_cell(result))


def _cell(value: Any) -> str:
    if value is None:
        return "[dim]NULL[/dim]"
    return escape(str(value))


ui = UI()

__all__ = ["UI", "ui", "console"]
