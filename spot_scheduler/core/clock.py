"""
Clock abstraction.

The scheduler never reads the wall clock directly; a Clock is injected so
that updates and selections are deterministic under test.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Protocol


class Clock(Protocol):
    """Interface for time sources."""

    def now(self) -> datetime:
        """Return the current timestamp."""
        ...


class SystemClock:
    """Local wall-clock time (naive; compared as local time against aware values)."""

    def now(self) -> datetime:
        return datetime.now()


class FixedClock:
    """A clock frozen at a given instant, advanced explicitly."""

    def __init__(self, instant: datetime):
        self._instant = instant

    def now(self) -> datetime:
        return self._instant

    def advance(self, delta: timedelta) -> datetime:
        self._instant = self._instant + delta
        return self._instant

    def set(self, instant: datetime) -> None:
        self._instant = instant
