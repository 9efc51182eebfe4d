# docstore/cli/commands/__init__.py
"""CLI command implementations, imported lazily by docstore.cli.cli."""
