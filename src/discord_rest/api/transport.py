"""HTTP transport used by the request handler."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol

import httpx
import orjson


@dataclass
class TransportResponse:
    """Status, headers and raw body of one HTTP round trip."""

    status: int
    headers: httpx.Headers
    body: bytes

    def json(self) -> Any:
        return orjson.loads(self.body)

    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")


class Transport(Protocol):
    async def execute(
        self,
        method: str,
        url: str,
        *,
        headers: dict[str, str],
        params: dict[str, Any] | None = None,
        content: bytes | None = None,
        files: list[tuple[str, tuple[str, bytes]]] | None = None,
        data: dict[str, str] | None = None,
    ) -> TransportResponse: ...

    async def close(self) -> None: ...


class HttpTransport:
    """Transport backed by a single httpx.AsyncClient.

    Network failures surface as httpx exceptions; HTTP error statuses do not
    raise here, they are returned for the request handler to interpret.
    """

    def __init__(self, timeout: httpx.Timeout | None = None) -> None:
        self._http = httpx.AsyncClient(timeout=timeout or httpx.Timeout(30.0, connect=10.0))

    async def execute(
        self,
        method: str,
        url: str,
        *,
        headers: dict[str, str],
        params: dict[str, Any] | None = None,
        content: bytes | None = None,
        files: list[tuple[str, tuple[str, bytes]]] | None = None,
        data: dict[str, str] | None = None,
    ) -> TransportResponse:
        resp = await self._http.request(
            method.upper(),
            url,
            headers=headers,
            params=params,
            content=content,
            files=files,
            data=data,
        )
        return TransportResponse(status=resp.status_code, headers=resp.headers, body=resp.content)

    async def close(self) -> None:
        await self._http.aclose()
