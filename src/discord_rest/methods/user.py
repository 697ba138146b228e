"""User endpoints."""

from __future__ import annotations

from typing import Any

from discord_rest import endpoints
from discord_rest.api.request_handler import RequestHandler


class UserMethods:
    """Methods for users, including the current user (`@me`)."""

    def __init__(self, request_handler: RequestHandler) -> None:
        self.request_handler = request_handler

    async def get_self(self) -> dict[str, Any]:
        """Get the user the token belongs to."""
        return await self.request_handler.request(endpoints.user("@me"), method="get")

    async def get_user(self, user_id: str) -> dict[str, Any]:
        return await self.request_handler.request(endpoints.user(user_id), method="get")

    async def update_self(self, data: dict[str, Any]) -> dict[str, Any]:
        """Update the current user's username or avatar."""
        return await self.request_handler.request(endpoints.user("@me"), method="patch", data=data)

    async def create_direct_message_channel(self, user_id: str) -> dict[str, Any]:
        """Open (or reuse) a DM channel with a user."""
        return await self.request_handler.request(
            endpoints.user_channels("@me"), method="post", data={"recipient_id": user_id}
        )

    async def get_guilds(
        self,
        before: str | None = None,
        after: str | None = None,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        params = {"before": before, "after": after, "limit": limit}
        return await self.request_handler.request(
            endpoints.user_guilds("@me"), params=params, method="get"
        )

    async def leave_guild(self, guild_id: str) -> None:
        await self.request_handler.request(endpoints.user_guild("@me", guild_id), method="delete")
