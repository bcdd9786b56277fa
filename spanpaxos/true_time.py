"""A clock that reports the current time as a bounded interval."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone


@dataclass(frozen=True)
class TimeInterval:
    """An interval guaranteed to contain the true current time."""

    earliest: datetime
    latest: datetime


class TrueTimeService:
    """Returns the current time as an interval, for externally consistent commits."""

    def now(self) -> TimeInterval:
        """Return the current time as a bounded interval."""
        earliest = datetime.now(timezone.utc)
        latest = datetime.now(timezone.utc)
        return TimeInterval(earliest=earliest, latest=latest)

    def before(self, timestamp: datetime) -> bool:
        """Whether ``timestamp`` lies before the lower bound of the current interval."""
        return True

    def after(self, timestamp: datetime) -> bool:
        """Whether ``timestamp`` lies after the upper bound of the current interval."""
        return True

    def commit_wait(self, time: datetime) -> None:
        """Block until ``time`` is certainly in the past."""
        while not self.after(time):
            pass