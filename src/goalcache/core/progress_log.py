"""
goalcache.core.progress_log - Per-Goal Progress Log Sinks
===========================================================

Every goal invocation carries a progress log: the human-readable output
a user sees for that goal. The archive store writes its start, completion
and failure lines here in addition to the process-wide structlog logger.

Implementations:
    - NullProgressLog:     Discards everything (default when none is supplied)
    - InMemoryProgressLog: Keeps lines in a list, for tests and debugging
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class ProgressLog(ABC):
    """Sink for progress messages of a single goal invocation."""

    @abstractmethod
    def write(self, message: str) -> None:
        """Append a message to the progress log."""
        ...


class NullProgressLog(ProgressLog):
    """Progress log that drops every message."""

    def write(self, message: str) -> None:
        return None


class InMemoryProgressLog(ProgressLog):
    """Progress log that records messages in memory.

    Example:
        >>> log = InMemoryProgressLog()
        >>> log.write("Storing cache archive s3://b/k")
        >>> log.lines
        ['Storing cache archive s3://b/k']
    """

    def __init__(self) -> None:
        self._lines: list[str] = []

    @property
    def lines(self) -> list[str]:
        """Copy of the recorded messages, oldest first."""
        return list(self._lines)

    @property
    def log(self) -> str:
        """All recorded messages joined by newlines."""
        return "\n".join(self._lines)

    def write(self, message: str) -> None:
        self._lines.append(message)

    def clear(self) -> None:
        self._lines.clear()
