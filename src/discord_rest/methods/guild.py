"""Guild endpoints: guild settings, members, roles and bans."""

from __future__ import annotations

from typing import Any

from discord_rest import endpoints
from discord_rest.api.request_handler import RequestHandler


class GuildMethods:
    def __init__(self, request_handler: RequestHandler) -> None:
        self.request_handler = request_handler

    async def get_guild(self, guild_id: str, with_counts: bool | None = None) -> dict[str, Any]:
        params = {"with_counts": str(with_counts).lower() if with_counts is not None else None}
        return await self.request_handler.request(
            endpoints.guild(guild_id), params=params, method="get"
        )

    async def update_guild(self, guild_id: str, data: dict[str, Any]) -> dict[str, Any]:
        return await self.request_handler.request(
            endpoints.guild(guild_id), method="patch", data=data
        )

    async def get_guild_channels(self, guild_id: str) -> list[dict[str, Any]]:
        return await self.request_handler.request(endpoints.guild_channels(guild_id), method="get")

    async def create_guild_channel(self, guild_id: str, data: dict[str, Any]) -> dict[str, Any]:
        return await self.request_handler.request(
            endpoints.guild_channels(guild_id), method="post", data=data
        )

    # -- Members --

    async def get_guild_member(self, guild_id: str, member_id: str) -> dict[str, Any]:
        return await self.request_handler.request(
            endpoints.guild_member(guild_id, member_id), method="get"
        )

    async def list_guild_members(
        self, guild_id: str, limit: int | None = None, after: str | None = None
    ) -> list[dict[str, Any]]:
        """List members (requires the GUILD_MEMBERS intent). limit is 1-1000."""
        return await self.request_handler.request(
            endpoints.guild_members(guild_id), params={"limit": limit, "after": after}, method="get"
        )

    async def update_guild_member(
        self, guild_id: str, member_id: str, data: dict[str, Any]
    ) -> dict[str, Any]:
        return await self.request_handler.request(
            endpoints.guild_member(guild_id, member_id), method="patch", data=data
        )

    async def remove_guild_member(
        self, guild_id: str, member_id: str, reason: str | None = None
    ) -> None:
        """Kick a member."""
        await self.request_handler.request(
            endpoints.guild_member(guild_id, member_id), method="delete", data={"reason": reason}
        )

    async def add_guild_member_role(
        self, guild_id: str, member_id: str, role_id: str, reason: str | None = None
    ) -> None:
        await self.request_handler.request(
            endpoints.guild_member_role(guild_id, member_id, role_id),
            method="put",
            data={"reason": reason},
        )

    async def remove_guild_member_role(
        self, guild_id: str, member_id: str, role_id: str, reason: str | None = None
    ) -> None:
        await self.request_handler.request(
            endpoints.guild_member_role(guild_id, member_id, role_id),
            method="delete",
            data={"reason": reason},
        )

    # -- Bans --

    async def get_guild_bans(self, guild_id: str) -> list[dict[str, Any]]:
        return await self.request_handler.request(endpoints.guild_bans(guild_id), method="get")

    async def create_guild_ban(
        self,
        guild_id: str,
        user_id: str,
        delete_message_seconds: int | None = None,
        reason: str | None = None,
    ) -> None:
        """Ban a user, optionally deleting up to 7 days (604800 s) of their messages."""
        data: dict[str, Any] = {"reason": reason}
        if delete_message_seconds is not None:
            data["delete_message_seconds"] = delete_message_seconds
        await self.request_handler.request(
            endpoints.guild_ban(guild_id, user_id), method="put", data=data
        )

    async def remove_guild_ban(
        self, guild_id: str, user_id: str, reason: str | None = None
    ) -> None:
        await self.request_handler.request(
            endpoints.guild_ban(guild_id, user_id), method="delete", data={"reason": reason}
        )

    # -- Roles / prune --

    async def get_guild_roles(self, guild_id: str) -> list[dict[str, Any]]:
        return await self.request_handler.request(endpoints.guild_roles(guild_id), method="get")

    async def create_guild_role(self, guild_id: str, data: dict[str, Any]) -> dict[str, Any]:
        return await self.request_handler.request(
            endpoints.guild_roles(guild_id), method="post", data=data
        )

    async def delete_guild_role(
        self, guild_id: str, role_id: str, reason: str | None = None
    ) -> None:
        await self.request_handler.request(
            endpoints.guild_role(guild_id, role_id), method="delete", data={"reason": reason}
        )

    async def get_guild_prune_count(self, guild_id: str, days: int = 7) -> dict[str, Any]:
        """Number of members that a prune of `days` days of inactivity would kick."""
        return await self.request_handler.request(
            endpoints.guild_prune(guild_id), params={"days": days}, method="get"
        )

    async def start_guild_prune(
        self, guild_id: str, days: int = 7, reason: str | None = None
    ) -> dict[str, Any]:
        return await self.request_handler.request(
            endpoints.guild_prune(guild_id), method="post", data={"days": days, "reason": reason}
        )
