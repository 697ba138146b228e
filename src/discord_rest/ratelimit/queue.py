"""Sequential async task runner underlying every rate limit bucket."""

from __future__ import annotations

import asyncio
import logging
from collections import deque
from collections.abc import Awaitable, Callable
from typing import Any

logger = logging.getLogger(__name__)

QueuedCall = Callable[[], Awaitable[Any]]


class AsyncSequentialQueue:
    """FIFO runner that executes at most one call at a time.

    `enqueue()` never waits: it returns a future that settles with the
    outcome of the call once its turn comes. While `blocked` is set no new
    entry is started; the entry already in flight always runs to completion.
    """

    def __init__(self) -> None:
        self._entries: deque[tuple[QueuedCall, asyncio.Future[Any]]] = deque()
        self._running = False
        self._blocked = False
        self._task: asyncio.Task[None] | None = None

    @property
    def blocked(self) -> bool:
        return self._blocked

    @property
    def running(self) -> bool:
        """True while an entry is in flight."""
        return self._running

    @property
    def pending(self) -> int:
        """Number of entries waiting to start."""
        return len(self._entries)

    def enqueue(self, fn: QueuedCall) -> asyncio.Future[Any]:
        future: asyncio.Future[Any] = asyncio.get_running_loop().create_future()
        self._entries.append((fn, future))
        self._drain()
        return future

    def set_blocked(self, blocked: bool) -> None:
        self._blocked = blocked
        if not blocked:
            self._drain()

    def drop(self) -> None:
        """Discard every pending entry. Their futures are never settled."""
        if self._entries:
            logger.debug("Dropping %d queued calls", len(self._entries))
        self._entries.clear()

    def _drain(self) -> None:
        if self._running or self._blocked or not self._entries:
            return
        self._running = True
        self._task = asyncio.get_running_loop().create_task(self._run())

    async def _run(self) -> None:
        try:
            while self._entries and not self._blocked:
                fn, future = self._entries.popleft()
                try:
                    result = await fn()
                except Exception as exc:
                    if not future.done():
                        future.set_exception(exc)
                else:
                    if not future.done():
                        future.set_result(result)
        finally:
            self._running = False
