"""Rate limit bucket: quota accounting plus a sequential call queue."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, TypeVar

from discord_rest.constants import DEFAULT_BUCKET_LIMIT, DEFAULT_BUCKET_RESET_MS, MIN_RESET_MS
from discord_rest.ratelimit.queue import AsyncSequentialQueue

if TYPE_CHECKING:
    from discord_rest.ratelimit.limiter import Ratelimiter

logger = logging.getLogger(__name__)

T = TypeVar("T")


class LocalBucket:
    """Tracks the call budget of one route (or of the whole account).

    Every dispatched call costs one unit of `remaining`. When it reaches zero
    the queue is blocked until the reset timer fires and restores `limit`.
    The timer is armed on the first call of a window and re-armed whenever
    the server reports how long the current window lasts.

    `route_key` is None for the global bucket, which is never evicted.
    """

    def __init__(
        self,
        ratelimiter: Ratelimiter,
        route_key: str | None,
        limit: int = DEFAULT_BUCKET_LIMIT,
        reset_ms: float = DEFAULT_BUCKET_RESET_MS,
    ) -> None:
        self.ratelimiter = ratelimiter
        self.route_key = route_key
        self.limit = limit
        self.remaining = limit
        self.reset_ms = reset_ms
        self.queue = AsyncSequentialQueue()
        self._reset_handle: asyncio.TimerHandle | None = None

    def __repr__(self) -> str:
        return (
            f"<LocalBucket {self.route_key or 'global'} "
            f"remaining={self.remaining}/{self.limit} reset_ms={self.reset_ms}>"
        )

    @property
    def reset_armed(self) -> bool:
        return self._reset_handle is not None

    def enqueue(self, fn: Callable[[LocalBucket], Awaitable[T]]) -> asyncio.Future[T]:
        """Queue `fn` to run once quota and ordering allow.

        `fn` is called with this bucket so it can feed response headers back.
        """

        async def dispatch() -> T:
            self.remaining = max(self.remaining - 1, 0)
            if self.remaining == 0:
                self.queue.set_blocked(True)
            if self._reset_handle is None:
                self.make_reset_timeout(self.reset_ms)
            return await fn(self)

        return self.queue.enqueue(dispatch)

    def make_reset_timeout(self, ms: float) -> None:
        """(Re-)arm the reset timer, cancelling any timer already pending."""
        if ms < 0:
            ms = MIN_RESET_MS
        if self._reset_handle is not None:
            self._reset_handle.cancel()
        loop = asyncio.get_running_loop()
        self._reset_handle = loop.call_later(ms / 1000, self.reset_remaining)

    def reset_remaining(self) -> None:
        """Start a new window: refill the budget and resume queued calls."""
        if self._reset_handle is not None:
            self._reset_handle.cancel()
            self._reset_handle = None
        self.remaining = self.limit
        logger.debug("Bucket %s reset to %d", self.route_key or "global", self.limit)
        self.queue.set_blocked(False)
        self.ratelimiter._bucket_reset(self)

    def apply_quota(
        self,
        remaining: int | None = None,
        limit: int | None = None,
        reset_after_ms: float | None = None,
    ) -> None:
        """Overwrite the local estimate with what the server reported."""
        if limit is not None:
            self.limit = max(limit, 1)
        if remaining is not None:
            self.remaining = max(remaining, 0)
            self.queue.set_blocked(self.remaining == 0)
        if reset_after_ms is not None:
            self.reset_ms = reset_after_ms if reset_after_ms >= 0 else MIN_RESET_MS
            self.make_reset_timeout(self.reset_ms)
        elif self.remaining == 0 and self._reset_handle is None:
            self.make_reset_timeout(self.reset_ms)

    def block_for(self, ms: float) -> None:
        """Suspend this bucket for `ms` milliseconds."""
        self.remaining = 0
        self.queue.set_blocked(True)
        self.make_reset_timeout(ms)

    def is_idle(self) -> bool:
        return self.queue.pending == 0 and not self.queue.running

    def drop_queue(self) -> None:
        self.queue.drop()

