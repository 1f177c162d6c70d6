"""Single-flight coalescing of concurrent async calls"""

import asyncio
from typing import Awaitable, Callable, Generic, Optional, TypeVar

T = TypeVar("T")


class SingleFlight(Generic[T]):
    """
    Run at most one instance of an async operation at a time.

    The first caller starts the operation in a task; callers arriving while it
    is in flight await that same task and receive the same result or
    exception. Once the task settles the next caller starts a fresh flight.

    Waiters await through ``asyncio.shield`` so cancelling one waiter never
    cancels the shared operation for the others.
    """

    def __init__(self) -> None:
        self._task: Optional["asyncio.Task[T]"] = None

    @property
    def in_flight(self) -> bool:
        return self._task is not None

    async def do(self, operation: Callable[[], Awaitable[T]]) -> T:
        task = self._task
        if task is None:
            task = asyncio.ensure_future(self._run(operation))
            # Mark the outcome as retrieved even if every waiter was cancelled
            task.add_done_callback(lambda t: t.cancelled() or t.exception())
            self._task = task
        return await asyncio.shield(task)

    async def _run(self, operation: Callable[[], Awaitable[T]]) -> T:
        try:
            return await operation()
        finally:
            self._task = None
