# docstore/logging/tags.py
"""
Subsystem tags prefixed on log messages.

Changing a tag here updates it project-wide.
"""

STORE = "[STORE]"
SCHEMA = "[SCHEMA]"
QUERY = "[QUERY]"
STORAGE = "[STORAGE]"
CLI = "[CLI]"
