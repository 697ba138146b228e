"""Tests for the route table and the global gate."""

from __future__ import annotations

import asyncio
import time

from discord_rest.constants import DEFAULT_BUCKET_LIMIT, DEFAULT_BUCKET_RESET_MS, MIN_RESET_MS
from discord_rest.ratelimit.bucket import LocalBucket
from discord_rest.ratelimit.limiter import Ratelimiter


def recorder(log: list[str], name: str):
    async def call(_bucket: LocalBucket) -> str:
        log.append(name)
        return name

    return call


class TestRouteTable:
    async def test_bucket_created_lazily(self, ratelimiter: Ratelimiter) -> None:
        assert ratelimiter.buckets == {}
        await ratelimiter.queue(recorder([], "a"), "/channels/1/messages/2", "get")
        assert list(ratelimiter.buckets) == ["/channels/1/messages/:id"]

    async def test_same_route_shares_bucket(self, ratelimiter: Ratelimiter) -> None:
        await ratelimiter.queue(recorder([], "a"), "/channels/1/messages/2", "get")
        await ratelimiter.queue(recorder([], "b"), "/channels/1/messages/3", "patch")
        bucket = ratelimiter.buckets["/channels/1/messages/:id"]
        assert bucket.remaining == DEFAULT_BUCKET_LIMIT - 2

    async def test_fn_gets_route_bucket(self, ratelimiter: Ratelimiter) -> None:
        async def call(bucket: LocalBucket) -> str | None:
            return bucket.route_key

        key = await ratelimiter.queue(call, "/guilds/9/members/4", "get")
        assert key == "/guilds/9/members/:id"

    async def test_idle_bucket_evicted_on_reset(self, ratelimiter: Ratelimiter) -> None:
        async def short_window(bucket: LocalBucket) -> None:
            bucket.apply_quota(remaining=1, limit=1, reset_after_ms=30)

        await ratelimiter.queue(short_window, "/channels/1/messages", "get")
        assert "/channels/1/messages" in ratelimiter.buckets

        await asyncio.sleep(0.08)
        assert "/channels/1/messages" not in ratelimiter.buckets

        await ratelimiter.queue(recorder([], "again"), "/channels/1/messages", "get")
        fresh = ratelimiter.buckets["/channels/1/messages"]
        assert fresh.limit == DEFAULT_BUCKET_LIMIT
        assert fresh.reset_ms == DEFAULT_BUCKET_RESET_MS

    async def test_busy_bucket_not_evicted(self, ratelimiter: Ratelimiter) -> None:
        bucket = ratelimiter.get_bucket("/channels/1/messages")
        bucket.queue.set_blocked(True)
        future = bucket.enqueue(recorder([], "a"))

        bucket.reset_remaining()
        assert ratelimiter.buckets["/channels/1/messages"] is bucket
        assert await future == "a"

    async def test_call_held_at_global_gate_uses_current_bucket(
        self, ratelimiter: Ratelimiter
    ) -> None:
        route = "/channels/1/messages"
        loop = asyncio.get_running_loop()
        seen: list[tuple[LocalBucket, float]] = []

        async def short_window(bucket: LocalBucket) -> None:
            bucket.apply_quota(remaining=1, limit=1, reset_after_ms=30)

        async def exhausts(bucket: LocalBucket) -> None:
            seen.append((bucket, loop.time()))
            bucket.apply_quota(remaining=0, limit=1, reset_after_ms=150)

        async def follows(bucket: LocalBucket) -> None:
            seen.append((bucket, loop.time()))

        await ratelimiter.queue(short_window, route, "post")
        ratelimiter.set_global(100)
        held = ratelimiter.queue(exhausts, route, "post")

        # The route's reset fires while the call is still held globally
        await asyncio.sleep(0.06)
        assert route not in ratelimiter.buckets

        await asyncio.gather(held, ratelimiter.queue(follows, route, "post"))

        (first_bucket, first_at), (second_bucket, second_at) = seen
        assert first_bucket is second_bucket
        assert ratelimiter.buckets[route] is first_bucket
        assert second_at - first_at >= 0.14


class TestGlobalGate:
    async def test_global_limit_spans_routes(self) -> None:
        ratelimiter = Ratelimiter(global_limit=2, global_reset_ms=100)
        loop = asyncio.get_running_loop()
        starts: list[float] = []

        async def call(_bucket: LocalBucket) -> None:
            starts.append(loop.time())

        await asyncio.gather(
            ratelimiter.queue(call, "/channels/1/messages", "get"),
            ratelimiter.queue(call, "/channels/2/messages", "get"),
            ratelimiter.queue(call, "/guilds/3", "get"),
        )
        assert starts[1] - starts[0] < 0.05
        assert starts[2] - starts[0] >= 0.09

    async def test_set_global_suspends_every_route(self, ratelimiter: Ratelimiter) -> None:
        loop = asyncio.get_running_loop()
        started = loop.time()
        log: list[str] = []

        ratelimiter.set_global(150)
        assert ratelimiter.global_
        assert ratelimiter.global_reset_at > 0

        futures = [
            ratelimiter.queue(recorder(log, "a"), "/channels/1/messages", "post"),
            ratelimiter.queue(recorder(log, "b"), "/guilds/2/members", "get"),
            ratelimiter.queue(recorder(log, "c"), "/channels/1/messages", "post"),
        ]
        await asyncio.sleep(0.05)
        assert log == []

        await asyncio.gather(*futures)
        assert log == ["a", "b", "c"]
        assert loop.time() - started >= 0.14
        assert not ratelimiter.global_
        assert ratelimiter.global_reset_at == 0.0

    async def test_negative_global_wait_uses_floor(self, ratelimiter: Ratelimiter) -> None:
        before = time.time() * 1000
        ratelimiter.set_global(-500)
        assert ratelimiter.global_
        assert ratelimiter.global_reset_at >= before + MIN_RESET_MS

    async def test_global_bucket_never_evicted(self, ratelimiter: Ratelimiter) -> None:
        global_bucket = ratelimiter.global_bucket
        ratelimiter.set_global(10)
        await asyncio.sleep(0.05)
        assert ratelimiter.global_bucket is global_bucket
        assert global_bucket.route_key is None
