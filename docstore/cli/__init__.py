# docstore/cli/__init__.py
"""Command line interface: `docstore set|push|get|errors`."""

from docstore.cli.cli import app

__all__ = ["app"]
