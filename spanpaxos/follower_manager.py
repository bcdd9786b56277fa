"""Fans replicate writes out to all followers and waits for a quorum."""

from __future__ import annotations

import asyncio
import uuid
from typing import Any, Callable, Mapping, Optional

from spanpaxos.commands import ReplicateWriteCommand, ReplicateWritePayload


class FollowerManager:
    """Dispatches replicate writes to every follower of the group.

    ``follower_dispatchers`` maps each follower's id to a dispatcher whose
    ``dispatch(command)`` sends the command to that follower. Without it the
    manager has not been started and writes are refused.
    """

    def __init__(self, follower_dispatchers: Optional[Mapping[uuid.UUID, Any]] = None) -> None:
        self._dispatchers = None if follower_dispatchers is None else dict(follower_dispatchers)

    async def replicate_write(
        self,
        payload: ReplicateWritePayload,
        on_dispatched: Optional[Callable[[uuid.UUID], None]] = None,
    ) -> None:
        """Send ``payload`` to every follower and wait until a quorum holds it.

        The wait also ends once every follower's reply has been handled without
        a quorum being signalled. An error signalled in place of the quorum is raised.
        """
        if self._dispatchers is None:
            raise RuntimeError("Followers handles not started")

        quorum = asyncio.get_running_loop().create_future()
        commands = []
        for follower_id, dispatcher in self._dispatchers.items():
            command = ReplicateWriteCommand(payload, quorum)
            dispatcher.dispatch(command)
            commands.append(command)
            if on_dispatched is not None:
                on_dispatched(follower_id)

        if not commands:
            return

        all_closed = asyncio.gather(*(command.wait_closed() for command in commands))
        try:
            await asyncio.wait({quorum, all_closed}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            all_closed.cancel()

        if quorum.done():
            quorum.result()
        else:
            # Later signals for this write must fail.
            quorum.cancel()