"""The leader's write path: persist locally, replicate, wait, commit."""

from __future__ import annotations

from datetime import datetime

from spanpaxos.commands import ReplicateWritePayload
from spanpaxos.follower_manager import FollowerManager
from spanpaxos.leader_state import LeaderState
from spanpaxos.true_time import TrueTimeService
from spanpaxos.wal import WriteAheadLogService


class LeaderOperator:
    """Carries out operations of the Paxos group leader."""

    def __init__(
        self,
        leader: LeaderState,
        follower_manager: FollowerManager,
        tt_service: TrueTimeService,
        wal_service: WriteAheadLogService,
    ) -> None:
        self.leader = leader
        self.follower_manager = follower_manager
        self.tt_service = tt_service
        self.wal_service = wal_service

    async def save_write(self, entry: str) -> None:
        """Persist ``entry``, replicate it to a quorum and commit it."""
        write_time = self.tt_service.now().latest
        slot_number = self.leader.next_index()
        self.leader.inc_next_index()

        await self.wal_service.append(entry)
        self.leader.update_match_index(slot_number)

        payload = self._create_payload(entry, slot_number, write_time)
        await self.follower_manager.replicate_write(payload, self.leader.inc_next_index)

        # The write's timestamp must be in the past before it becomes visible.
        self.tt_service.commit_wait(write_time)
        self.leader.update_commit_index(slot_number)

    def _create_payload(
        self, entry: str, slot_number: int, write_time: datetime
    ) -> ReplicateWritePayload:
        return ReplicateWritePayload(
            term_number=self.leader.term_number,
            slot_number=slot_number,
            entry=entry,
            write_time=write_time,
            lease_expiry_time=self.leader.lease_expiry_time,
        )