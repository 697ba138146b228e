"""Errors raised for failed REST calls."""

from __future__ import annotations

from typing import Any

DEFAULT_ERROR_CODE = 4000


class DiscordAPIError(Exception):
    """The API answered with a status code that is not a success.

    Carries the request path and method plus the platform's own error
    code and message so callers can decide whether to retry.
    """

    def __init__(
        self,
        path: str,
        method: str,
        http_status: int,
        message: str = "",
        code: int = DEFAULT_ERROR_CODE,
        errors: dict[str, Any] | None = None,
    ) -> None:
        self.path = path
        self.method = method.upper()
        self.http_status = http_status
        self.message = message or f"HTTP {http_status}"
        self.code = code
        self.errors = errors
        super().__init__(f"{self.method} {path} -> {http_status}: {self.message} (code {code})")


class RateLimitedError(DiscordAPIError):
    """A 429 answer. Retried by the request handler, raised once attempts run out."""

    def __init__(self, path: str, method: str, retry_after_ms: float, is_global: bool) -> None:
        super().__init__(path, method, 429, "You are being rate limited", code=429)
        self.retry_after_ms = retry_after_ms
        self.is_global = is_global
