"""Gateway and application endpoints."""

from __future__ import annotations

from typing import Any

from discord_rest import endpoints
from discord_rest.api.request_handler import RequestHandler


class BotMethods:
    """Methods for bot-specific endpoints."""

    def __init__(self, request_handler: RequestHandler) -> None:
        self.request_handler = request_handler

    async def get_gateway(self) -> dict[str, Any]:
        """Get the gateway url to connect to."""
        return await self.request_handler.request(endpoints.GATEWAY, method="get")

    async def get_gateway_bot(self) -> dict[str, Any]:
        """Get the gateway url plus the recommended shard count and session start limit."""
        return await self.request_handler.request(endpoints.GATEWAY_BOT, method="get")

    async def get_application_info(self) -> dict[str, Any]:
        return await self.request_handler.request(
            endpoints.oauth2_application("@me"), method="get"
        )

    async def update_application_info(self, data: dict[str, Any]) -> dict[str, Any]:
        return await self.request_handler.request(
            endpoints.oauth2_application("@me"), method="patch", data=data
        )
