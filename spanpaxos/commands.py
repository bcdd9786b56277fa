"""Follower settings, replicate-write payloads and the commands that carry them."""

from __future__ import annotations

import asyncio
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from spanpaxos.messages import ReplicateWriteRequest, Timestamp

_MAX_PORT = 65_535


@dataclass(frozen=True)
class FollowerConfig:
    """Where a follower of the Paxos group can be reached."""

    follower_id: uuid.UUID
    host_address: str
    port: int

    def __post_init__(self) -> None:
        if not 0 <= self.port <= _MAX_PORT:
            raise ValueError(f"port out of range: {self.port}")


@dataclass(frozen=True)
class ReplicateWritePayload:
    """The data of one replicate write operation."""

    term_number: int
    slot_number: int
    entry: str
    write_time: datetime
    lease_expiry_time: datetime


class ReplicateWriteCommand:
    """A replicate write sent to one follower, able to signal that a quorum was reached.

    All commands of one write share the ``quorum`` future. The first signal
    resolves it; once it is resolved or abandoned, further signals fail.
    """

    def __init__(self, payload: ReplicateWritePayload, quorum: asyncio.Future) -> None:
        self.payload = payload
        self._quorum = quorum
        self._closed = asyncio.Event()

    @property
    def closed(self) -> bool:
        """Whether handling of this command has finished."""
        return self._closed.is_set()

    async def send(self, result: Optional[BaseException] = None) -> None:
        """Signal the outcome of the write: ``None`` for success, else the error."""
        if result is not None and not isinstance(result, BaseException):
            raise TypeError("result must be None or an exception")
        if self._quorum.done():
            raise RuntimeError("quorum channel closed")
        if result is None:
            self._quorum.set_result(None)
        else:
            self._quorum.set_exception(result)

    def close(self) -> None:
        """Mark handling of this command as finished."""
        self._closed.set()

    async def wait_closed(self) -> None:
        """Wait until handling of this command has finished."""
        await self._closed.wait()

    def create_request(self) -> ReplicateWriteRequest:
        """Build the request sent to the follower."""
        return ReplicateWriteRequest(
            term_number=self.payload.term_number,
            slot_number=self.payload.slot_number,
            entry=self.payload.entry,
            write_time=Timestamp.from_datetime(self.payload.write_time),
            lease_expiry_time=Timestamp.from_datetime(self.payload.lease_expiry_time),
        )