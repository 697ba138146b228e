"""Ratelimiter: owns per-route buckets and the account-wide bucket."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from typing import TypeVar

from discord_rest.constants import GLOBAL_REQUESTS_PER_SECOND, GLOBAL_RESET_MS, MIN_RESET_MS
from discord_rest.ratelimit.bucket import LocalBucket
from discord_rest.ratelimit.router import DEFAULT_ROUTE_RULES, RouteRules, routify

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Ratelimiter:
    """Schedules calls so they respect both route and global quotas.

    Each call is queued on the global bucket first; when the global bucket
    admits it, the call is queued on its route bucket. A call therefore runs
    only after clearing both gates.

    Route buckets are created on first use and evicted when their reset
    timer fires with nothing queued or in flight.
    """

    def __init__(
        self,
        rules: RouteRules = DEFAULT_ROUTE_RULES,
        global_limit: int = GLOBAL_REQUESTS_PER_SECOND,
        global_reset_ms: float = GLOBAL_RESET_MS,
    ) -> None:
        self.rules = rules
        self.buckets: dict[str, LocalBucket] = {}
        self.global_bucket = LocalBucket(self, None, limit=global_limit, reset_ms=global_reset_ms)
        self._global = False
        self.global_reset_at = 0.0

    @property
    def global_(self) -> bool:
        """True while an account-wide rate limit is in effect."""
        return self._global

    def routify(self, url: str, method: str) -> str:
        return routify(url, method, self.rules)

    def get_bucket(self, route_key: str) -> LocalBucket:
        bucket = self.buckets.get(route_key)
        if bucket is None:
            bucket = LocalBucket(self, route_key)
            self.buckets[route_key] = bucket
            logger.debug("Created bucket %s", route_key)
        return bucket

    def queue(
        self,
        fn: Callable[[LocalBucket], Awaitable[T]],
        url: str,
        method: str,
    ) -> asyncio.Future[T]:
        """Schedule `fn` under the quota of the route `url`/`method` maps to.

        `fn` receives the route bucket. The returned future settles with
        the outcome of `fn`.
        """
        route_key = self.routify(url, method)

        async def through_route(_global_bucket: LocalBucket) -> T:
            # Looked up on admission, after any eviction during the global wait
            return await self.get_bucket(route_key).enqueue(fn)

        return self.global_bucket.enqueue(through_route)

    def set_global(self, ms: float) -> None:
        """Suspend every route for `ms` milliseconds."""
        if ms < 0:
            ms = MIN_RESET_MS
        self._global = True
        self.global_reset_at = time.time() * 1000 + ms
        logger.warning("Global rate limit hit, suspending all requests for %.0fms", ms)
        self.global_bucket.block_for(ms)

    def _bucket_reset(self, bucket: LocalBucket) -> None:
        if bucket is self.global_bucket:
            if self._global:
                self._global = False
                self.global_reset_at = 0.0
                logger.info("Global rate limit lifted")
            return
        key = bucket.route_key
        if key is not None and bucket.is_idle() and self.buckets.get(key) is bucket:
            del self.buckets[key]
            logger.debug("Evicted idle bucket %s", key)
