"""Guild emoji endpoints."""

from __future__ import annotations

from typing import Any

from discord_rest import endpoints
from discord_rest.api.request_handler import RequestHandler


class EmojiMethods:
    """Methods for a guild's custom emoji."""

    def __init__(self, request_handler: RequestHandler) -> None:
        self.request_handler = request_handler

    async def get_emojis(self, guild_id: str) -> list[dict[str, Any]]:
        return await self.request_handler.request(endpoints.guild_emojis(guild_id), method="get")

    async def get_emoji(self, guild_id: str, emoji_id: str) -> dict[str, Any]:
        return await self.request_handler.request(
            endpoints.guild_emoji(guild_id, emoji_id), method="get"
        )

    async def create_emoji(self, guild_id: str, data: dict[str, Any]) -> dict[str, Any]:
        """Create an emoji. `data` needs a `name` and an `image` data URI (max 256 KiB)."""
        return await self.request_handler.request(
            endpoints.guild_emojis(guild_id), method="post", data=data
        )

    async def update_emoji(
        self, guild_id: str, emoji_id: str, data: dict[str, Any]
    ) -> dict[str, Any]:
        return await self.request_handler.request(
            endpoints.guild_emoji(guild_id, emoji_id), method="patch", data=data
        )

    async def delete_emoji(self, guild_id: str, emoji_id: str, reason: str | None = None) -> None:
        await self.request_handler.request(
            endpoints.guild_emoji(guild_id, emoji_id), method="delete", data={"reason": reason}
        )
