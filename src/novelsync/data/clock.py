"""Time source and sync cursor conversion.

Sync cursors are integers counting milliseconds since the Unix epoch. Every
timestamp the store writes is truncated to millisecond precision so that a
record's ``updated_at`` and a cursor can be compared without rounding.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Protocol

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


class Clock(Protocol):
    """Source of the current time for the store and cursor minting."""

    def now(self) -> datetime:
        """Return the current time as an aware UTC datetime."""
        ...


def truncate_to_millis(value: datetime) -> datetime:
    """Drop sub-millisecond precision from a datetime."""
    return value.replace(microsecond=value.microsecond - value.microsecond % 1000)


def ensure_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes read back from SQLite."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def to_cursor(value: datetime) -> int:
    """Convert a datetime into an epoch-millisecond cursor."""
    delta = ensure_utc(value) - EPOCH
    return delta // timedelta(milliseconds=1)


def from_cursor(cursor: int | None) -> datetime:
    """Convert a cursor into a UTC datetime.

    ``None`` and ``0`` both mean the beginning of time (full sync).
    """
    return EPOCH + timedelta(milliseconds=cursor or 0)


class SystemClock:
    """Wall clock, truncated to milliseconds."""

    def now(self) -> datetime:
        return truncate_to_millis(datetime.now(UTC))


class ManualClock:
    """Deterministic clock for tests and replays.

    Args:
        start: Initial cursor value in epoch milliseconds.
        step_ms: Amount the clock advances after each ``now()`` call.
    """

    def __init__(self, start: int = 1_700_000_000_000, step_ms: int = 0) -> None:
        self._current = start
        self.step_ms = step_ms

    @property
    def cursor(self) -> int:
        """Current time as a cursor, without advancing."""
        return self._current

    def now(self) -> datetime:
        value = from_cursor(self._current)
        self._current += self.step_ms
        return value

    def advance(self, ms: int) -> None:
        """Move the clock forward (or backward for negative values)."""
        self._current += ms

    def set(self, cursor: int) -> None:
        """Jump to an absolute cursor value."""
        self._current = cursor


_default_clock: Clock = SystemClock()


def get_clock() -> Clock:
    """Return the process-wide clock (FastAPI dependency)."""
    return _default_clock
