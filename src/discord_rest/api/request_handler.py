"""Request dispatch: HTTP execution under rate limits, with retries."""

from __future__ import annotations

import asyncio
import logging
import secrets
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import quote

import httpx
import orjson

from discord_rest.api.errors import DEFAULT_ERROR_CODE, DiscordAPIError, RateLimitedError
from discord_rest.api.models import APIErrorBody, RateLimitEvent, RateLimitPayload, RequestInfo
from discord_rest.api.transport import HttpTransport, Transport, TransportResponse
from discord_rest.config import ClientOptions
from discord_rest.constants import (
    BAD_GATEWAY_STATUS,
    DO_NOT_RETRY_STATUS_CODES,
    FALLBACK_RETRY_AFTER_MS,
    OK_STATUS_CODES,
    RATE_LIMITED_STATUS,
)
from discord_rest.ratelimit.bucket import LocalBucket
from discord_rest.ratelimit.limiter import Ratelimiter

logger = logging.getLogger(__name__)

EVENTS = ("request", "done", "request_error", "rate_limit")
DATA_TYPES = ("json", "multipart")

Listener = Callable[..., Any]


@dataclass
class _PreparedBody:
    headers: dict[str, str] = field(default_factory=dict)
    content: bytes | None = None
    files: list[tuple[str, tuple[str, bytes]]] | None = None
    form: dict[str, str] | None = None


class RequestHandler:
    """Executes REST calls through the Ratelimiter.

    Every attempt is queued on the limiter, so retries are subject to the
    same quotas as first attempts. Quota headers of each response are fed
    back into the route bucket that admitted the call.

    Events (register with `on()`):
        request(req_id, RequestInfo)      an attempt is about to hit the network
        done(req_id, TransportResponse)   the attempt got a success status
        request_error(req_id, exception)  the attempt failed
        rate_limit(RateLimitEvent)        a 429 was received
    """

    def __init__(
        self,
        ratelimiter: Ratelimiter,
        options: ClientOptions | None = None,
        token: str | None = None,
        transport: Transport | None = None,
    ) -> None:
        self.ratelimiter = ratelimiter
        self.options = options or ClientOptions()
        self.api_url = self.options.api_url
        self.headers: dict[str, str] = {"User-Agent": self.options.user_agent}
        if token:
            self.headers["Authorization"] = token
        self.transport: Transport = transport or HttpTransport()
        self.latency = 500.0
        self._listeners: dict[str, list[Listener]] = {name: [] for name in EVENTS}

    async def close(self) -> None:
        await self.transport.close()

    # -- Events --

    def on(self, event: str, listener: Listener) -> None:
        self._listener_list(event).append(listener)

    def off(self, event: str, listener: Listener) -> None:
        listeners = self._listener_list(event)
        if listener in listeners:
            listeners.remove(listener)

    def _listener_list(self, event: str) -> list[Listener]:
        if event not in self._listeners:
            msg = f"Unknown event {event!r}. Expected one of {', '.join(EVENTS)}"
            raise ValueError(msg)
        return self._listeners[event]

    def _emit(self, event: str, *args: Any) -> None:
        for listener in list(self._listeners[event]):
            listener(*args)

    # -- Requests --

    async def request(
        self,
        endpoint: str,
        params: dict[str, Any] | None = None,
        method: str = "get",
        data_type: str = "json",
        data: Any = None,
        extra_headers: dict[str, str] | None = None,
    ) -> Any:
        """Call `endpoint` and return the decoded JSON body (None when empty).

        Raises DiscordAPIError for error statuses that are not (or no longer)
        retried. Transport failures propagate unchanged.
        """
        if data_type not in DATA_TYPES:
            msg = f"Unsupported data_type {data_type!r}. Use 'json' or 'multipart'"
            raise ValueError(msg)
        body = self._prepare_body(method, data_type, data)
        query = {k: v for k, v in (params or {}).items() if v is not None}

        attempt = 0
        while True:

            async def run(bucket: LocalBucket | None, attempt: int = attempt) -> Any:
                return await self._attempt(
                    bucket, endpoint, query, method, data_type, data, body, extra_headers, attempt
                )

            try:
                if self.options.bypass_buckets:
                    return await run(None)
                return await self.ratelimiter.queue(run, endpoint, method)
            except DiscordAPIError as exc:
                if not self._should_retry(exc, attempt):
                    raise
                attempt += 1
                logger.warning(
                    "Retrying %s %s after HTTP %d (retry %d/%d)",
                    method.upper(), endpoint, exc.http_status, attempt, self.options.retry_limit,
                )
                if isinstance(exc, RateLimitedError) and self.options.bypass_buckets:
                    # No bucket holds the wait for us
                    await asyncio.sleep(exc.retry_after_ms / 1000)

    def _should_retry(self, exc: DiscordAPIError, attempt: int) -> bool:
        if attempt >= self.options.retry_limit:
            return False
        if exc.http_status in (RATE_LIMITED_STATUS, BAD_GATEWAY_STATUS):
            return True
        if not self.options.retry_requests:
            return False
        return exc.http_status not in DO_NOT_RETRY_STATUS_CODES

    async def _attempt(
        self,
        bucket: LocalBucket | None,
        endpoint: str,
        query: dict[str, Any],
        method: str,
        data_type: str,
        data: Any,
        body: _PreparedBody,
        extra_headers: dict[str, str] | None,
        attempt: int,
    ) -> Any:
        req_id = secrets.token_hex(20)
        self._emit(
            "request",
            req_id,
            RequestInfo(
                endpoint=endpoint, method=method, data_type=data_type, data=data, attempt=attempt
            ),
        )
        try:
            headers = {**self.headers, **body.headers, **(extra_headers or {})}
            before = time.monotonic()
            resp = await self.transport.execute(
                method,
                f"{self.api_url}{endpoint}",
                headers=headers,
                params=query or None,
                content=body.content,
                files=body.files,
                data=body.form,
            )
            self.latency = (time.monotonic() - before) * 1000
            logger.debug(
                "%s %s -> %d in %.0fms", method.upper(), endpoint, resp.status, self.latency
            )

            if bucket is not None:
                self._apply_ratelimit_headers(bucket, resp.headers)
            if resp.status == RATE_LIMITED_STATUS:
                self._handle_rate_limit(bucket, resp, endpoint, method)
            if resp.status not in OK_STATUS_CODES:
                raise self._api_error(endpoint, method, resp)
        except Exception as exc:
            self._emit("request_error", req_id, exc)
            raise

        self._emit("done", req_id, resp)
        return self._decode(resp)

    # -- Body preparation --

    def _prepare_body(self, method: str, data_type: str, data: Any) -> _PreparedBody:
        prepared = _PreparedBody()
        payload = data
        if isinstance(data, dict) and "reason" in data:
            payload = dict(data)
            reason = payload.pop("reason")
            if reason:
                prepared.headers["X-Audit-Log-Reason"] = quote(str(reason))
            if not payload:
                payload = None

        if data_type == "multipart":
            return self._prepare_multipart(prepared, payload)

        if payload is None or method.lower() in ("get", "head"):
            return prepared
        if isinstance(payload, bytes):
            prepared.content = payload
        elif isinstance(payload, str):
            prepared.content = payload.encode()
        else:
            prepared.content = orjson.dumps(payload)
        prepared.headers["Content-Type"] = "application/json"
        return prepared

    def _prepare_multipart(self, prepared: _PreparedBody, payload: Any) -> _PreparedBody:
        if not isinstance(payload, dict) or not payload.get("files"):
            msg = "Multipart requests need a dict with a non-empty 'files' list"
            raise ValueError(msg)
        payload = dict(payload)
        files = payload.pop("files")
        parts: list[tuple[str, tuple[str, bytes]]] = []
        for index, item in enumerate(files):
            if not item.get("name") or item.get("file") is None:
                msg = f"File #{index} needs both 'name' and 'file'"
                raise ValueError(msg)
            parts.append((f"files[{index}]", (item["name"], item["file"])))
        prepared.files = parts
        prepared.form = {"payload_json": orjson.dumps(payload).decode()}
        return prepared

    # -- Response handling --

    def _apply_ratelimit_headers(self, bucket: LocalBucket, headers: httpx.Headers) -> None:
        remaining = _parse_number(headers.get("x-ratelimit-remaining"))
        limit = _parse_number(headers.get("x-ratelimit-limit"))
        reset_after = _parse_number(headers.get("x-ratelimit-reset-after"))
        bucket.apply_quota(
            remaining=int(remaining) if remaining is not None else None,
            limit=int(limit) if limit is not None else None,
            reset_after_ms=reset_after * 1000 if reset_after is not None else None,
        )

    def _handle_rate_limit(
        self,
        bucket: LocalBucket | None,
        resp: TransportResponse,
        endpoint: str,
        method: str,
    ) -> None:
        try:
            payload = RateLimitPayload.model_validate(resp.json())
        except ValueError:
            payload = RateLimitPayload()

        is_global = (
            payload.global_
            or resp.headers.get("x-ratelimit-global", "").lower() == "true"
            or resp.headers.get("x-ratelimit-scope") == "global"
        )
        if payload.retry_after is not None:
            retry_after_ms = payload.retry_after * 1000
        else:
            header_value = _parse_number(resp.headers.get("retry-after"))
            retry_after_ms = (
                header_value * 1000 if header_value is not None else FALLBACK_RETRY_AFTER_MS
            )

        if is_global:
            self.ratelimiter.set_global(retry_after_ms)
        elif bucket is not None:
            bucket.block_for(retry_after_ms)

        route = self.ratelimiter.routify(endpoint, method)
        logger.warning(
            "Rate limited on %s %s (%s), retrying in %.0fms",
            method.upper(), endpoint, "global" if is_global else route, retry_after_ms,
        )
        self._emit(
            "rate_limit",
            RateLimitEvent(
                timeout=retry_after_ms,
                remaining=bucket.remaining if bucket else 0,
                limit=bucket.limit if bucket else 0,
                method=method,
                path=endpoint,
                route=route,
                is_global=is_global,
            ),
        )
        raise RateLimitedError(endpoint, method, retry_after_ms, is_global)

    def _api_error(self, endpoint: str, method: str, resp: TransportResponse) -> DiscordAPIError:
        try:
            body = APIErrorBody.model_validate(resp.json())
        except ValueError:
            return DiscordAPIError(endpoint, method, resp.status, resp.text())
        return DiscordAPIError(
            endpoint,
            method,
            resp.status,
            body.message or "",
            code=body.code if body.code is not None else DEFAULT_ERROR_CODE,
            errors=body.errors,
        )

    def _decode(self, resp: TransportResponse) -> Any:
        if not resp.body:
            return None
        try:
            return resp.json()
        except orjson.JSONDecodeError:
            logger.debug("Non-JSON body (%d bytes) ignored", len(resp.body))
            return None


def _parse_number(value: str | None) -> float | None:
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        logger.debug("Ignoring malformed rate limit header value %r", value)
        return None
