# docstore/cli/cli.py
"""
Docstore CLI - Main application.

Commands:
    docstore set       Create or update a document
    docstore push      Create a document under a generated id
    docstore get       Read ids, one document, all documents or matches
    docstore check     Check that the database accepts a connection

Global options:
    --config / -C      YAML file with the connection fields
    --verbose / -v     Debug logging

NOTE: Commands use lazy loading - implementations are imported when invoked.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer

from docstore.cli.context import CLIContext
from docstore.logging.logger import configure_logging

app = typer.Typer(
    name="docstore",
    help="Schema-flexible documents on a relational database.",
    no_args_is_help=True,
    add_completion=False,
)


@app.callback()
def main(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(
        None, "--config", "-C", help="YAML file with host, user, password and name."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging."),
) -> None:
    """Schema-flexible documents on a relational database."""
    configure_logging(level=logging.DEBUG if verbose else logging.WARNING)
    ctx.obj = CLIContext(config_path=config, verbose=verbose)


# =============================================================================
# LAZY COMMANDS
# =============================================================================


@app.command("set")
def set_cmd(
    ctx: typer.Context,
    table: str = typer.Argument(..., help="Table name."),
    child: str = typer.Argument(..., help="Document id."),
    attribute: Optional[List[str]] = typer.Option(
        None, "--attribute", "-a", help="key=value or key=value:type. Repeatable."
    ),
) -> None:
    """Create or update a document."""
    from docstore.cli.commands import data as mod

    mod.set_command(ctx.obj, table, child, attribute)


@app.command("push")
def push_cmd(
    ctx: typer.Context,
    table: str = typer.Argument(..., help="Table name."),
    attribute: Optional[List[str]] = typer.Option(
        None, "--attribute", "-a", help="key=value or key=value:type. Repeatable."
    ),
    id_length: Optional[int] = typer.Option(
        None, "--id-length", "-n", min=1, max=255, help="Length of the generated id."
    ),
) -> None:
    """Create a document under a generated id and print the id."""
    from docstore.cli.commands import data as mod

    mod.push_command(ctx.obj, table, attribute, id_length)


@app.command("get")
def get_cmd(
    ctx: typer.Context,
    table: str = typer.Argument(..., help="Table name."),
    child: Optional[str] = typer.Argument(None, help="Document id. Omit to list ids."),
    all_rows: bool = typer.Option(False, "--all", help="Every document, keyed by id."),
    column: Optional[List[str]] = typer.Option(
        None, "--column", "-c", help="Column to return. Repeatable."
    ),
    where: Optional[List[str]] = typer.Option(
        None, "--where", "-w", help="attr=value equality filter. Repeatable, joined with AND."
    ),
) -> None:
    """Read from a table."""
    from docstore.cli.commands import data as mod

    mod.get_command(ctx.obj, table, child, all_rows, column, where)


@app.command("check")
def check_cmd(ctx: typer.Context) -> None:
    """Check that the configured database accepts a connection."""
    from docstore.cli.commands import data as mod

    mod.check_command(ctx.obj)


if __name__ == "__main__":
    app()
