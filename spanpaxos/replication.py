"""Sending replicate writes to a follower and handling the follower's replies."""

from __future__ import annotations

import sys
import uuid
from typing import Any, Awaitable, Callable, Tuple

from spanpaxos.commands import ReplicateWriteCommand
from spanpaxos.leader_state import LeaderState
from spanpaxos.messages import ReplicateWriteResponse, ReplicateWriteResult, ServiceError
from spanpaxos.task_dispatcher import TaskDispatcher

ReplicateWriteOutput = Tuple[ReplicateWriteCommand, ReplicateWriteResult]


class ReplicationError(Exception):
    """A follower's reply to a replicate write could not be accepted."""


def create_replicate_write_dispatcher(
    leader_state: LeaderState, client: Any
) -> TaskDispatcher[ReplicateWriteCommand, ReplicateWriteOutput]:
    """Build a dispatcher sending commands through ``client`` and handling the replies.

    ``client`` needs an async ``replicate_write(request)`` returning a
    :class:`ReplicateWriteResponse` and raising :class:`ServiceError` on failure.
    """

    async def executor(command: ReplicateWriteCommand) -> ReplicateWriteOutput:
        return await execute_replicate_write_request(client, command)

    return TaskDispatcher(executor, _create_handler(leader_state))


async def execute_replicate_write_request(
    client: Any, command: ReplicateWriteCommand
) -> ReplicateWriteOutput:
    """Send the command's request to the follower; return the command and the outcome."""
    request = command.create_request()
    try:
        result: ReplicateWriteResult = await client.replicate_write(request)
    except ServiceError as exc:
        result = exc
    except Exception as exc:  # transport failures surface as an unavailable status
        result = ServiceError(str(exc), code="unavailable")
    return command, result


def _create_handler(
    leader_state: LeaderState,
) -> Callable[[ReplicateWriteOutput], Awaitable[None]]:
    async def handle(output: ReplicateWriteOutput) -> None:
        command, result = output
        try:
            await handle_replicate_write_response(leader_state, command, result)
        except Exception as exc:
            print(f"Error handling replicate write response: {exc}", file=sys.stderr)
        finally:
            command.close()

    return handle


async def handle_replicate_write_response(
    leader_state: LeaderState,
    command: ReplicateWriteCommand,
    result: ReplicateWriteResult,
) -> None:
    """Record a follower's reply and signal the command once a quorum holds the entry."""
    if isinstance(result, ServiceError):
        raise result
    response: ReplicateWriteResponse = result
    if response.term_number < leader_state.term_number:
        raise ReplicationError("Follower response is for an older term")

    try:
        follower_id = uuid.UUID(response.follower_id)
    except ValueError as exc:
        raise ReplicationError(f"invalid follower id: {response.follower_id!r}") from exc
    leader_state.update_match_index(response.slot_number, follower_id)

    if leader_state.has_committed(response.slot_number):
        return

    if leader_state.has_quorum(response.slot_number):
        await command.send(None)