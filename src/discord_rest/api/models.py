"""Pydantic models for rate limit payloads and diagnostic events."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

# -- Wire payloads --


class RateLimitPayload(BaseModel):
    """Body of a 429 response."""

    message: str = "You are being rate limited."
    retry_after: float | None = None  # seconds
    global_: bool = Field(default=False, alias="global")
    code: int | None = None

    model_config = {"extra": "allow", "populate_by_name": True}


class APIErrorBody(BaseModel):
    """Body of a non-2xx response: `{"code": 50035, "message": "...", "errors": {...}}`."""

    code: int | None = None
    message: str | None = None
    errors: dict[str, Any] | None = None

    model_config = {"extra": "allow"}


# -- Diagnostic events --


class RequestInfo(BaseModel):
    """Emitted with the `request` event when an attempt starts."""

    endpoint: str
    method: str
    data_type: str
    data: Any = None
    attempt: int = 0


class RateLimitEvent(BaseModel):
    """Emitted with the `rate_limit` event whenever a 429 is received."""

    timeout: float  # ms until the route (or account) may be called again
    remaining: int
    limit: int
    method: str
    path: str
    route: str
    is_global: bool = False
