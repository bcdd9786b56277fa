"""Background workers and a dispatcher that runs tasks and handles their outputs."""

from __future__ import annotations

import asyncio
import sys
from abc import ABC, abstractmethod
from enum import IntEnum
from typing import Awaitable, Callable, Generic, TypeVar

I = TypeVar("I")
O = TypeVar("O")

Executor = Callable[[I], Awaitable[O]]
Handler = Callable[[O], Awaitable[None]]

_OUTPUT_CAPACITY = 1024


class RunStatus(IntEnum):
    """Run status of a worker runner."""

    IDLE = 0
    ACTIVE = 1


class Worker(ABC):
    """Lifecycle hooks of a background worker."""

    @abstractmethod
    async def on_start(self, cancel_event: asyncio.Event) -> asyncio.Task:
        """Start the worker's background task and return it."""

    @abstractmethod
    async def on_stop(self, cancel_event: asyncio.Event) -> None:
        """Run the worker's own stop logic."""


class TaskDispatcher(Worker, Generic[I, O]):
    """Runs dispatched tasks concurrently and handles their outputs in the background."""

    def __init__(self, executor: Executor, handler: Handler) -> None:
        self._executor = executor
        self._handler = handler
        self._outputs: asyncio.Queue = asyncio.Queue(maxsize=_OUTPUT_CAPACITY)
        self._processing = asyncio.Lock()
        self._inflight: set[asyncio.Task] = set()

    def dispatch(self, input: I) -> None:
        """Start executing ``input``; its output is queued for the handler."""
        task = asyncio.get_running_loop().create_task(self._execute(input))
        self._inflight.add(task)
        task.add_done_callback(self._finished)

    async def _execute(self, input: I) -> None:
        output = await self._executor(input)
        await self._outputs.put(output)

    def _finished(self, task: asyncio.Task) -> None:
        self._inflight.discard(task)
        if not task.cancelled() and task.exception() is not None:
            print(f"Task execution failed: {task.exception()}", file=sys.stderr)

    async def process_outputs(self, cancel_event: asyncio.Event) -> None:
        """Hand queued outputs to the handler until ``cancel_event`` is set."""
        async with self._processing:
            while not cancel_event.is_set():
                getter = asyncio.ensure_future(self._outputs.get())
                waiter = asyncio.ensure_future(cancel_event.wait())
                await asyncio.wait({getter, waiter}, return_when=asyncio.FIRST_COMPLETED)
                waiter.cancel()
                if getter.done() and not getter.cancelled():
                    # An output already taken from the queue is never dropped.
                    await self._handler(getter.result())
                else:
                    getter.cancel()

    async def on_start(self, cancel_event: asyncio.Event) -> asyncio.Task:
        """Start processing outputs in the background."""
        return asyncio.get_running_loop().create_task(self.process_outputs(cancel_event))

    async def on_stop(self, cancel_event: asyncio.Event) -> None:
        """Wait for in-flight executions to hand over their outputs."""
        pending = list(self._inflight)
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)