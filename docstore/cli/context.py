# docstore/cli/context.py
"""
CLI context shared by every command.

Holds the global options and turns them into a connected DocumentStore:

    ctx = CLIContext(config_path=Path("docstore.yaml"))
    store = ctx.open_store()      # exits with code 1 if it cannot connect

Without --config the connection fields come from DOCSTORE_* variables.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape

from docstore.cli.ui import ui
from docstore.core.config import ConfigError, StoreConfig, load_store_config
from docstore.logging.logger import get_logger
from docstore.logging.tags import CLI
from docstore.store import DocumentStore

logger = get_logger(__name__)


@dataclass
class CLIContext:
    """Global options of one CLI invocation."""

    config_path: Optional[Path] = None
    verbose: bool = False

    def load_config(self) -> StoreConfig:
        """Config from the --config file, else from the environment."""
        try:
            if self.config_path is not None:
                logger.debug(f"{CLI} Loading config from {self.config_path}")
                return load_store_config(self.config_path)
            return StoreConfig.from_env()
        except ConfigError as e:
            ui.error(str(e))
            raise typer.Exit(1)

    def open_store(self) -> DocumentStore:
        """Connected store, or exit 1 after printing the connection error."""
        store = DocumentStore(self.load_config())
        if not store.connect():
            fail(store, self.verbose)
        return store


def fail(store: DocumentStore, verbose: bool = False) -> None:
    """
    Print the store's error log, disconnect and exit 1.

    Warnings are shown first, then the most recent error. With verbose the
    error's call stack follows.
    """
    entry = None
    for logged in store.errors:
        if logged.is_error:
            entry = logged
        else:
            ui.warning(escape(logged.message))

    ui.error(escape(entry.message) if entry is not None else "Operation failed")
    if verbose and entry is not None:
        ui.info(escape(entry.format_trace()))
    store.disconnect()
    raise typer.Exit(1)


__all__ = ["CLIContext", "fail"]
