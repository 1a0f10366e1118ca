"""Injectable clock.

Services never call ``datetime.now()`` themselves; they receive a Clock so
expiry and nudge windows can be exercised with a fixed time in tests.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone


class Clock(ABC):
    """Source of the current time."""

    @abstractmethod
    def now(self) -> datetime:
        """Get the current time as a timezone-aware UTC datetime."""
        pass


class SystemClock(Clock):
    """Wall clock used in production."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock(Clock):
    """Clock that only moves when told to.

    Starts at ``start`` (or 2025-01-06 09:00 UTC) and stays there until
    ``advance`` or ``set`` is called.
    """

    def __init__(self, start: datetime | None = None) -> None:
        self._current = start or datetime(2025, 1, 6, 9, 0, tzinfo=timezone.utc)

    def now(self) -> datetime:
        return self._current

    def set(self, moment: datetime) -> None:
        """Jump to a specific moment."""
        self._current = moment

    def advance(self, **delta: float) -> datetime:
        """Move forward by a timedelta given as keyword arguments.

        Example:
            clock.advance(minutes=61)
        """
        self._current = self._current + timedelta(**delta)
        return self._current
