# spanpaxos

`spanpaxos` is the core of a Spanner-style Paxos group leader, built on `asyncio`. It has no dependencies outside the standard library.

## What is in it

- **`spanpaxos.leader_state`**
  - `LeaderState` holds the leader's `id`, `term_number`, `commit_index`, `t_safe` and `lease_expiry_time`.
  - It also keeps a score board that maps each group member's id to a `LogPosition`, which has a `match_index` and a `next_index`.
  - `next_index`, `inc_next_index` and `update_match_index` act on the leader itself when no member id is given. A member that is not yet known gets a new zeroed position.
  - `has_quorum(slot)` is true when a strict majority of the members on the score board have a match index of at least `slot`.
  - `has_committed(slot)` is true when `slot <= commit_index`.
  - The methods that change the score board or the commit index take a lock.
- **`spanpaxos.true_time`**
  - `TrueTimeService.now()` returns a `TimeInterval` with `earliest` and `latest` fields.
  - `commit_wait(time)` loops until `after(time)` is true.
- **`spanpaxos.wal`**
  - `WriteAheadLogService(path).append(entry)` appends `entry` and a newline to the log file.
  - It flushes the file and calls `fsync` on it.
  - The write runs in a worker thread. Appends are serialised.
- **`spanpaxos.task_dispatcher`**
  - `Worker` is an abstract base with async `on_start` / `on_stop` hooks. `RunStatus` is an enum with the values `IDLE` and `ACTIVE`.
  - `TaskDispatcher(executor, handler)` is a `Worker`. `dispatch(input)` runs `await executor(input)` as a task and puts the output in a queue that holds up to 1024 items.
  - `on_start(cancel_event)` starts `process_outputs`, which passes each queued output to `await handler(output)` until the event is set.
  - `on_stop` waits for executions that are still in flight.
- **`spanpaxos.messages`**
  - `Timestamp` holds seconds and nanoseconds since the epoch, and provides `from_datetime` / `to_datetime`.
  - `ReplicateWriteRequest` and `ReplicateWriteResponse` carry a replicated write and the follower's reply.
  - `SaveWriteRequest` and `SaveWriteResponse` are the client's request and the reply to it.
  - `ServiceError` is an exception that carries a `message` and a `code`.
- **`spanpaxos.commands`**
  - `FollowerConfig` holds a follower's id, host and port. The port must be in the range 0–65535.
  - `ReplicateWritePayload` holds the data of one write.
  - `ReplicateWriteCommand` carries the payload to one follower. `create_request()` builds the request from the payload. `send()` signals the quorum that the commands of one write share; sending a second time raises `RuntimeError`.
- **`spanpaxos.replication`**
  - `create_replicate_write_dispatcher(leader_state, client)` builds a `TaskDispatcher`. It sends each command through `client.replicate_write(request)` and handles the follower's reply.
  - `handle_replicate_write_response` applies the reply to the leader state. A reply from an older term raises `ReplicationError`, and so does a follower id that is not a valid UUID. A valid reply updates the follower's match index. If the slot is not yet committed and a quorum now holds it, the quorum is signalled.
- **`spanpaxos.follower_manager`**
  - `FollowerManager(follower_dispatchers)` takes a mapping from follower id to a dispatcher.
  - `replicate_write(payload, on_dispatched)` sends a command to every follower. It returns when a quorum is signalled, or when every reply has been handled without one.
  - Without dispatchers it raises `RuntimeError("Followers handles not started")`.
- **`spanpaxos.leader_operator`**
  - `LeaderOperator.save_write(entry)` runs the write path in this order: it takes the timestamp and slot, appends the entry to the WAL, marks the leader's match index, replicates to the followers, runs the commit wait, and updates the commit index.
- **`spanpaxos.leader_service`**
  - `LeaderService.save_write(request)` calls the operator and returns a `SaveWriteResponse`.
  - Any failure is raised again as a `ServiceError` with code `"internal"`.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Examples

Track replication progress on the score board:

```python
import uuid
from spanpaxos.leader_state import LeaderState

leader = LeaderState()
follower = uuid.uuid4()

slot = leader.next_index(None)       # the leader's own next slot
leader.inc_next_index(None)
leader.update_match_index(slot + 1, None)
leader.update_match_index(slot + 1, follower)

if leader.has_quorum(slot + 1):
    leader.update_commit_index(slot + 1)

assert leader.has_committed(slot + 1)
```

Convert timestamps to and from the wire form:

```python
from datetime import datetime, timezone
from spanpaxos.messages import Timestamp

ts = Timestamp.from_datetime(datetime(2024, 1, 1, tzinfo=timezone.utc))
assert ts.to_datetime() == datetime(2024, 1, 1, tzinfo=timezone.utc)
```

Save writes through the leader. The followers here are in-process stand-ins that acknowledge every request:

```python
import asyncio
import os
import tempfile
import uuid

from spanpaxos.follower_manager import FollowerManager
from spanpaxos.leader_operator import LeaderOperator
from spanpaxos.leader_service import LeaderService
from spanpaxos.leader_state import LeaderState
from spanpaxos.messages import ReplicateWriteResponse, SaveWriteRequest
from spanpaxos.replication import create_replicate_write_dispatcher
from spanpaxos.true_time import TrueTimeService
from spanpaxos.wal import WriteAheadLogService


class AckingFollower:
    def __init__(self, follower_id):
        self.follower_id = follower_id

    async def replicate_write(self, request):
        return ReplicateWriteResponse(
            term_number=request.term_number,
            slot_number=request.slot_number,
            follower_id=str(self.follower_id),
        )


async def main(log_path):
    leader = LeaderState()
    cancel = asyncio.Event()
    dispatchers = {}
    for _ in range(2):
        follower_id = uuid.uuid4()
        dispatchers[follower_id] = create_replicate_write_dispatcher(
            leader, AckingFollower(follower_id)
        )
    workers = [await d.on_start(cancel) for d in dispatchers.values()]

    operator = LeaderOperator(
        leader, FollowerManager(dispatchers), TrueTimeService(), WriteAheadLogService(log_path)
    )
    service = LeaderService(operator)
    await service.save_write(SaveWriteRequest(payload="x=1"))
    await service.save_write(SaveWriteRequest(payload="y=2"))
    assert leader.commit_index == 1

    cancel.set()
    await asyncio.gather(*workers)


with tempfile.TemporaryDirectory() as directory:
    path = os.path.join(directory, "wal.log")
    asyncio.run(main(path))
```

## What it does not do

- **No network transport.** There is no server that exposes `LeaderService`, and no client that connects to followers. You pass the follower client to `create_replicate_write_dispatcher` yourself. It must be an object with an async `replicate_write(request)` method, and a failure should raise `ServiceError`; any other exception is treated as code `"unavailable"`.
- **No follower side.** Nothing here receives replicated writes or stores them on a follower. Followers are never told that an entry has been committed.
- **No real clock uncertainty.** `TrueTimeService.now()` reads the system clock twice. `before` and `after` always return `True`, so `commit_wait` returns immediately.
- **No log reading.** The write-ahead log is append-only. Nothing reads it back or replays it.
- **No worker runner.** `RunStatus` is defined, but nothing tracks it. Start a dispatcher with `on_start` and stop it by setting the cancel event.
- **No leader election, lease renewal or recovery.** Nothing here runs these, and there is no command-line program.