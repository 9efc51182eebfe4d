# docstore/core/ids.py
"""Random document ids for push()."""

from __future__ import annotations

import secrets
import string

ALPHABET = string.digits + string.ascii_lowercase + string.ascii_uppercase


def generate_id(length: int = 10) -> str:
    """Uniformly random [0-9a-zA-Z]{length} string."""
    if length < 1:
        raise ValueError(f"id length must be positive, got {length}")
    return "".join(secrets.choice(ALPHABET) for _ in range(length))


__all__ = ["ALPHABET", "generate_id"]
