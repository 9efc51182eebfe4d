# docstore/core/error_log.py
"""
Ordered error log owned by a DocumentStore.

Entries are appended in the order failures happen and are never pruned.
Lookups count backwards from the most recent entry: index 0 is the newest.
"""

from __future__ import annotations

import traceback
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator


class LogLevel(str, Enum):
    """Severity of a log entry."""

    ERROR = "Error"  # aborted the call
    WARNING = "Warning"  # input was coerced, call continued


@dataclass(frozen=True)
class LogEntry:
    """One recorded failure or warning."""

    level: LogLevel
    message: str
    kind: str = ""  # exception class name, empty for warnings
    trace: tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_error(self) -> bool:
        return self.level == LogLevel.ERROR

    def format_trace(self) -> str:
        """Captured call stack as text, oldest frame first."""
        return "".join(self.trace)

    def __str__(self) -> str:
        return f"[DOCSTORE] {self.level.value} - {self.message}"


class ErrorLog:
    """
    Append-only sequence of LogEntry with most-recent-first lookup.

    Only the owning store appends; callers read through DocumentStore.error().
    """

    def __init__(self) -> None:
        self._entries: list[LogEntry] = []

    def append(
        self,
        level: LogLevel,
        message: str,
        kind: str = "",
        skip_frames: int = 1,
    ) -> LogEntry:
        """
        Record an entry with the caller's stack.

        Args:
            level: Entry severity
            message: Human-readable message
            kind: Exception class name, if the entry comes from one
            skip_frames: Innermost frames to drop from the captured stack
        """
        stack = traceback.format_stack()
        if skip_frames > 0:
            stack = stack[:-skip_frames]
        entry = LogEntry(level=level, message=message, kind=kind, trace=tuple(stack))
        self._entries.append(entry)
        return entry

    def recent(self, n: int = 0) -> LogEntry | None:
        """Entry n positions back from the newest, or None if out of range."""
        if n < 0 or n >= len(self._entries):
            return None
        return self._entries[len(self._entries) - 1 - n]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[LogEntry]:
        return iter(self._entries)


__all__ = ["ErrorLog", "LogEntry", "LogLevel"]
