"""Bookkeeping state held by the leader of a Paxos group."""

from __future__ import annotations

import threading
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone


@dataclass
class LogPosition:
    """Positions of a group member's local write-ahead log."""

    # Index of the last entry persisted to the member's local WAL.
    match_index: int = 0
    # Index of the next entry to be persisted to the member's local WAL.
    next_index: int = 0


class LeaderState:
    """Thread-safe state of a Paxos group leader."""

    def __init__(self) -> None:
        now = datetime.now(timezone.utc)
        self.id: uuid.UUID = uuid.uuid4()
        self.term_number: int = 0
        self.commit_index: int = 0
        # Time at which the leader is safe to serve a read request.
        self.t_safe: datetime = now
        self.lease_expiry_time: datetime = now
        self._score_board: dict[uuid.UUID, LogPosition] = {}
        self._lock = threading.Lock()

    def _position(self, member_id: uuid.UUID | None) -> LogPosition:
        key = self.id if member_id is None else member_id
        return self._score_board.setdefault(key, LogPosition())

    def next_index(self, member_id: uuid.UUID | None = None) -> int:
        """Return the next log index of a member, the leader itself by default."""
        with self._lock:
            return self._position(member_id).next_index

    def has_quorum(self, slot_number: int) -> bool:
        """Whether a majority of known members have persisted ``slot_number``."""
        with self._lock:
            matched = sum(
                1
                for position in self._score_board.values()
                if position.match_index >= slot_number
            )
            return matched >= len(self._score_board) // 2 + 1

    def has_committed(self, slot_number: int) -> bool:
        """Whether the entry at ``slot_number`` has been committed."""
        return slot_number <= self.commit_index

    def update_commit_index(self, index: int) -> None:
        """Record ``index`` as the last committed entry."""
        with self._lock:
            self.commit_index = index

    def inc_next_index(self, member_id: uuid.UUID | None = None) -> None:
        """Advance the next log index of a member, the leader itself by default."""
        with self._lock:
            self._position(member_id).next_index += 1

    def update_match_index(self, index: int, member_id: uuid.UUID | None = None) -> None:
        """Record ``index`` as the last entry persisted by a member."""
        with self._lock:
            self._position(member_id).match_index = index