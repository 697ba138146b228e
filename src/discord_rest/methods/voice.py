"""Voice endpoints."""

from __future__ import annotations

from typing import Any

from discord_rest import endpoints
from discord_rest.api.request_handler import RequestHandler


class VoiceMethods:
    def __init__(self, request_handler: RequestHandler) -> None:
        self.request_handler = request_handler

    async def get_voice_regions(self) -> list[dict[str, Any]]:
        """List the voice regions that can be used when setting a channel's rtc_region."""
        return await self.request_handler.request(endpoints.VOICE_REGIONS, method="get")
