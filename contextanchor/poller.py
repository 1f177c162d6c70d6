"""
Polling of server-side processing

Uploaded documents move through several processing stages on the server and
the only way to observe them is to re-fetch the collection. ResourcePoller
does that on a fixed interval and stops by itself as soon as every item has
reached a terminal state. Polling never stops on a timer; only data (or an
explicit cancel) ends it.
"""

import asyncio
import logging
from typing import (
    Any,
    AsyncIterator,
    Awaitable,
    Callable,
    Generic,
    Iterable,
    List,
    Optional,
    TypeVar,
)

from pydantic import ValidationError as PydanticValidationError

from .exceptions import ContextAnchorError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _item_id(item: Any) -> Any:
    return getattr(item, "id")


def merge_by_id(
    current: Iterable[T],
    refreshed: Iterable[T],
    key: Callable[[T], Any] = _item_id,
) -> List[T]:
    """
    Merge a full re-fetch into a locally held collection.

    Items are matched by identity: refreshed versions replace the local ones
    in place, new items are appended, items absent from the re-fetch are
    dropped (a tick always returns the whole collection).
    """
    fresh = {key(item): item for item in refreshed}
    merged = [fresh.pop(key(item)) for item in current if key(item) in fresh]
    merged.extend(fresh.values())
    return merged


class ResourcePoller(Generic[T]):
    """
    Re-fetch a collection until every item satisfies ``is_terminal``.

    Example:
        >>> poller = ResourcePoller(client.documents.list, lambda d: d.is_terminal)
        >>> async for documents in poller.watch(initial):
        ...     print([d.status for d in documents])
    """

    def __init__(
        self,
        fetch: Callable[[], Awaitable[List[T]]],
        is_terminal: Callable[[T], bool],
        interval: float = 3.0,
    ):
        """
        Args:
            fetch: Coroutine function returning the full collection
            is_terminal: Predicate telling whether an item is done processing
            interval: Seconds between ticks
        """
        if interval < 0:
            raise ValueError("interval must be >= 0")
        self._fetch = fetch
        self._is_terminal = is_terminal
        self.interval = interval

        self._generation = 0
        self._ticks_in_flight = 0
        self._stop = asyncio.Event()
        self._task: Optional["asyncio.Task[None]"] = None
        self.latest: Optional[List[T]] = None

    def all_terminal(self, collection: Iterable[T]) -> bool:
        return all(self._is_terminal(item) for item in collection)

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done() and not self._stop.is_set()

    @property
    def tick_in_flight(self) -> bool:
        return self._ticks_in_flight > 0

    async def _tick(self) -> Optional[List[T]]:
        """One full re-fetch; a failure is logged and treated as a no-op"""
        self._ticks_in_flight += 1
        try:
            return list(await self._fetch())
        except ContextAnchorError as e:
            logger.warning(f"Poll tick failed, retrying on next interval: {e.message}")
            return None
        except (PydanticValidationError, ValueError) as e:
            logger.warning(f"Poll tick returned an unreadable collection, retrying on next interval: {e}")
            return None
        finally:
            self._ticks_in_flight -= 1

    async def _sleep(self, stop: asyncio.Event) -> bool:
        """Wait one interval; returns False when cancelled meanwhile"""
        if stop.is_set():
            return False
        try:
            await asyncio.wait_for(stop.wait(), timeout=self.interval)
        except asyncio.TimeoutError:
            return True
        return False

    def watch(self, collection: Optional[Iterable[T]] = None) -> AsyncIterator[List[T]]:
        """
        Yield refreshed collections until every item is terminal.

        Args:
            collection: Current collection; when it is already all terminal
                nothing is fetched. When omitted the first tick happens
                immediately.

        Returns:
            Async iterator over the full collection after each successful tick
        """
        # Only one watch is live per poller; starting one retires the previous
        self._stop.set()
        self._stop = asyncio.Event()
        self._generation += 1
        return self._watch(collection, self._stop, self._generation)

    async def _watch(
        self,
        collection: Optional[Iterable[T]],
        stop: asyncio.Event,
        generation: int,
    ) -> AsyncIterator[List[T]]:
        if collection is not None:
            collection = list(collection)
            self.latest = collection
            if self.all_terminal(collection):
                return
            if not await self._sleep(stop):
                return

        while True:
            if generation != self._generation or stop.is_set():
                return
            snapshot = await self._tick()
            # A tick that lands after cancel/restart belongs to a dead watch
            if generation != self._generation or stop.is_set():
                return

            if snapshot is not None:
                self.latest = snapshot
                yield snapshot
                if self.all_terminal(snapshot):
                    logger.debug("All items reached a terminal state; polling stopped")
                    return

            if not await self._sleep(stop):
                return

    def start(
        self,
        collection: Optional[Iterable[T]] = None,
        on_update: Optional[Callable[[List[T]], Any]] = None,
    ) -> None:
        """Run watch() in a background task, passing each snapshot to on_update"""
        self._task = asyncio.ensure_future(self._run(self.watch(collection), on_update))

    async def _run(self, snapshots: AsyncIterator[List[T]], on_update) -> None:
        async for snapshot in snapshots:
            if on_update is not None:
                result = on_update(snapshot)
                if asyncio.iscoroutine(result):
                    await result

    def ensure_running(
        self,
        collection: Iterable[T],
        on_update: Optional[Callable[[List[T]], Any]] = None,
    ) -> bool:
        """
        Restart background polling if ``collection`` has unfinished items.

        Returns:
            bool: True when polling is (now) running
        """
        collection = list(collection)
        if self.running:
            return True
        if self.all_terminal(collection):
            return False
        self.start(collection, on_update)
        return True

    async def refresh(self) -> Optional[List[T]]:
        """Tick immediately, unless a tick is already in flight"""
        if self.tick_in_flight:
            logger.debug("Skipping refresh: previous tick still in flight")
            return None
        snapshot = await self._tick()
        if snapshot is not None:
            self.latest = snapshot
        return snapshot

    def cancel(self) -> None:
        """
        Stop polling.

        A tick already in flight is allowed to finish but its result is
        discarded and no further tick is scheduled.
        """
        self._generation += 1
        self._stop.set()

    async def wait(self) -> None:
        """Wait for the background task to finish"""
        if self._task is not None:
            await self._task

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        self.cancel()
        return False
