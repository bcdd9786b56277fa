"""Messages exchanged between the leader, its followers and clients."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional, Union

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_NANOS_PER_SECOND = 1_000_000_000
_SECONDS_PER_DAY = 86_400


@dataclass(frozen=True)
class Timestamp:
    """A point in time as whole seconds and nanoseconds since the Unix epoch."""

    seconds: int = 0
    nanos: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.nanos < _NANOS_PER_SECOND:
            raise ValueError(f"nanos out of range: {self.nanos}")

    @classmethod
    def from_datetime(cls, value: datetime) -> Timestamp:
        """Build a timestamp from a datetime; naive datetimes are taken as UTC."""
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        delta = value - _EPOCH
        return cls(
            seconds=delta.days * _SECONDS_PER_DAY + delta.seconds,
            nanos=delta.microseconds * 1000,
        )

    def to_datetime(self) -> datetime:
        """Return the timestamp as a UTC datetime, truncated to microseconds."""
        return _EPOCH + timedelta(seconds=self.seconds, microseconds=self.nanos // 1000)


@dataclass(frozen=True)
class ReplicateWriteRequest:
    """Asks a follower to persist a log entry at a slot."""

    term_number: int
    slot_number: int
    entry: str
    write_time: Optional[Timestamp] = None
    lease_expiry_time: Optional[Timestamp] = None


@dataclass(frozen=True)
class ReplicateWriteResponse:
    """A follower's acknowledgement that it persisted a log entry."""

    term_number: int
    slot_number: int
    follower_id: str


@dataclass(frozen=True)
class SaveWriteRequest:
    """A client's request to save a write."""

    payload: str


@dataclass(frozen=True)
class SaveWriteResponse:
    """Reply to a successful save write request."""


class ServiceError(Exception):
    """A failed remote call, with a status code and a message."""

    def __init__(self, message: str, code: str = "internal") -> None:
        super().__init__(message)
        self.message = message
        self.code = code


ReplicateWriteResult = Union[ReplicateWriteResponse, ServiceError]