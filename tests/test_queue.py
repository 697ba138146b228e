"""Tests for the sequential async queue."""

from __future__ import annotations

import asyncio

import pytest

from discord_rest.ratelimit.queue import AsyncSequentialQueue


def recorder(log: list[str], name: str, delay: float = 0.0):
    async def call() -> str:
        log.append(f"start {name}")
        await asyncio.sleep(delay)
        log.append(f"end {name}")
        return name

    return call


class TestOrdering:
    async def test_runs_in_fifo_order_one_at_a_time(self) -> None:
        queue = AsyncSequentialQueue()
        log: list[str] = []
        futures = [queue.enqueue(recorder(log, n, 0.01)) for n in ("a", "b", "c")]
        results = await asyncio.gather(*futures)
        assert results == ["a", "b", "c"]
        assert log == ["start a", "end a", "start b", "end b", "start c", "end c"]

    async def test_enqueue_returns_pending_future(self) -> None:
        queue = AsyncSequentialQueue()
        future = queue.enqueue(recorder([], "x"))
        assert not future.done()
        assert await future == "x"

    async def test_failure_settles_future_and_queue_continues(self) -> None:
        queue = AsyncSequentialQueue()

        async def boom() -> None:
            raise RuntimeError("boom")

        failing = queue.enqueue(boom)
        ok = queue.enqueue(recorder([], "after"))
        with pytest.raises(RuntimeError, match="boom"):
            await failing
        assert await ok == "after"
        assert not queue.running


class TestBlocking:
    async def test_blocked_queue_holds_entries(self) -> None:
        queue = AsyncSequentialQueue()
        queue.set_blocked(True)
        log: list[str] = []
        future = queue.enqueue(recorder(log, "a"))
        await asyncio.sleep(0.02)
        assert log == []
        assert queue.pending == 1

        queue.set_blocked(False)
        assert await future == "a"
        assert queue.pending == 0

    async def test_block_lets_in_flight_entry_finish(self) -> None:
        queue = AsyncSequentialQueue()
        log: list[str] = []

        async def blocks_queue() -> str:
            queue.set_blocked(True)
            log.append("first")
            return "first"

        first = queue.enqueue(blocks_queue)
        second = queue.enqueue(recorder(log, "second"))
        assert await first == "first"
        await asyncio.sleep(0.02)
        assert log == ["first"]
        assert not second.done()

        queue.set_blocked(False)
        assert await second == "second"

    async def test_drop_discards_pending_only(self) -> None:
        queue = AsyncSequentialQueue()
        log: list[str] = []
        in_flight = queue.enqueue(recorder(log, "a", 0.02))
        dropped = queue.enqueue(recorder(log, "b"))
        await asyncio.sleep(0)
        queue.drop()

        assert await in_flight == "a"
        await asyncio.sleep(0.02)
        assert not dropped.done()
        assert log == ["start a", "end a"]
