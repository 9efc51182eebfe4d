# docstore/logging/__init__.py
"""Logging helpers shared by every docstore module."""

from docstore.logging.logger import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]
