# docstore/logging/logger.py
"""
Unified logging setup for docstore.

All modules use:
    from docstore.logging.logger import get_logger
    logger = get_logger(__name__)

Configuration happens once, in configure_logging() (the CLI entrypoint
calls it). Library users configure logging their own way.
"""

from __future__ import annotations

import logging
import sys

DEFAULT_FORMAT = "[%(levelname)s] %(name)s: %(message)s"


def configure_logging(
    level: int = logging.INFO,
    fmt: str = DEFAULT_FORMAT,
    stream=sys.stderr,
) -> None:
    """
    Configure root logging handler.

    Safe to call multiple times; handler duplication is prevented.
    """
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler(stream)
        handler.setFormatter(logging.Formatter(fmt))
        root.addHandler(handler)

    root.setLevel(level)


def get_logger(name: str) -> logging.Logger:
    """
    Modules call this to get a logger.

    Example:
        logger = get_logger(__name__)
    """
    return logging.getLogger(name)
