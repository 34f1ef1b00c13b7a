"""
Observable state holder

Latest-value container pushed to listeners on every change. Used for the
live event list, per-event chat streams, the current user's profile, and
action/auth result state.

    events = Observable([])
    remove = events.listen(lambda value: print(len(value)))

    async for snapshot in events.updates():
        ...
"""

import asyncio
import inspect
import logging
from typing import AsyncIterator, Callable, Generic, List, Optional, Set, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

Listener = Callable[[T], object]


class Observable(Generic[T]):
    """Holds the latest value and notifies listeners when it changes"""

    def __init__(self, initial: T, name: Optional[str] = None):
        self._value: T = initial
        self._listeners: List[Listener] = []
        self._queues: List[asyncio.Queue] = []
        self._tasks: Set[asyncio.Task] = set()
        self.name = name or "observable"

    @property
    def value(self) -> T:
        return self._value

    def set(self, value: T) -> None:
        """Replace the value and notify listeners"""
        self._value = value
        for listener in list(self._listeners):
            try:
                result = listener(value)
                if inspect.isawaitable(result):
                    task = asyncio.ensure_future(result)
                    self._tasks.add(task)
                    task.add_done_callback(self._on_listener_done)
            except Exception as e:
                logger.error(f"Listener on {self.name} failed: {e}")
        for queue in list(self._queues):
            queue.put_nowait(value)

    def _on_listener_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error(f"Listener on {self.name} failed: {task.exception()}")

    def listen(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a callable that removes it"""
        self._listeners.append(listener)

        def remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove

    @property
    def listener_count(self) -> int:
        return len(self._listeners) + len(self._queues)

    async def updates(self, include_current: bool = True) -> AsyncIterator[T]:
        """Iterate over values as they are set"""
        queue: asyncio.Queue = asyncio.Queue()
        self._queues.append(queue)
        try:
            if include_current:
                yield self._value
            while True:
                yield await queue.get()
        finally:
            self._queues.remove(queue)

    def __repr__(self) -> str:
        return f"Observable({self.name}={self._value!r})"
