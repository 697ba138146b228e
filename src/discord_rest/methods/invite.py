"""Invite endpoints."""

from __future__ import annotations

from typing import Any

from discord_rest import endpoints
from discord_rest.api.request_handler import RequestHandler


class InviteMethods:
    def __init__(self, request_handler: RequestHandler) -> None:
        self.request_handler = request_handler

    async def get_invite(
        self,
        code: str,
        with_counts: bool | None = None,
        with_expiration: bool | None = None,
    ) -> dict[str, Any]:
        """Get an invite by its code.

        Args:
            code: The invite code (the part after discord.gg/).
            with_counts: Include approximate member and presence counts.
            with_expiration: Include the expiration date.
        """
        params = {"with_counts": _flag(with_counts), "with_expiration": _flag(with_expiration)}
        return await self.request_handler.request(
            endpoints.invite(code), params=params, method="get"
        )

    async def delete_invite(self, code: str, reason: str | None = None) -> dict[str, Any]:
        return await self.request_handler.request(
            endpoints.invite(code), method="delete", data={"reason": reason}
        )


def _flag(value: bool | None) -> str | None:
    if value is None:
        return None
    return str(value).lower()
