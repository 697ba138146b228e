"""Shared fixtures for the REST client tests."""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable
from typing import Any

import pytest

from discord_rest.api.request_handler import RequestHandler
from discord_rest.client import RestClient
from discord_rest.config import ClientOptions
from discord_rest.ratelimit.limiter import Ratelimiter


@pytest.fixture
def ratelimiter() -> Ratelimiter:
    return Ratelimiter()


@pytest.fixture
def options() -> ClientOptions:
    return ClientOptions()


@pytest.fixture
async def handler(
    ratelimiter: Ratelimiter, options: ClientOptions
) -> AsyncIterator[RequestHandler]:
    h = RequestHandler(ratelimiter, options, token="Bot test-token")
    yield h
    await h.close()


@pytest.fixture
async def client() -> AsyncIterator[RestClient]:
    c = RestClient("Bot test-token", ClientOptions(allowed_mentions={"parse": []}))
    yield c
    await c.close()


@pytest.fixture
async def make_handler(ratelimiter: Ratelimiter) -> AsyncIterator[Callable[..., RequestHandler]]:
    """Build handlers with custom options; all are closed after the test."""
    created: list[RequestHandler] = []

    def factory(**option_overrides: Any) -> RequestHandler:
        h = RequestHandler(ratelimiter, ClientOptions(**option_overrides), token="Bot test-token")
        created.append(h)
        return h

    yield factory
    for h in created:
        await h.close()
