# tests/unit/conftest.py
"""Tier markers for unit tests."""

from __future__ import annotations

import pytest


def pytest_collection_modifyitems(items):
    """Add tier markers to unit tests based on type.

    Tier 1: Pure logic with no database
    Tier 2: In-memory SQLite or scripted fake backends
    """
    # Files that should be tier1 (pure logic, fast, no database)
    TIER1_PATTERNS = [
        "test_types",
        "test_predicates",
        "test_builder",
        "test_shaping",
        "test_error_log",
        "test_config",
        "test_ids",
        "test_postgres_backend",
    ]

    for item in items:
        fspath = str(item.fspath)

        # Only process tests in unit directory
        if "/unit/" not in fspath and "\\unit\\" not in fspath:
            continue

        # Skip tier marking if already has a tier marker
        has_tier = any(marker.name.startswith("tier") for marker in item.iter_markers())
        if has_tier:
            continue

        if any(pattern in fspath for pattern in TIER1_PATTERNS):
            item.add_marker(pytest.mark.tier1)
        else:
            item.add_marker(pytest.mark.tier2)
