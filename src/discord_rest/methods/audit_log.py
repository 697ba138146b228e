"""Audit log endpoint."""

from __future__ import annotations

from typing import Any

from discord_rest import endpoints
from discord_rest.api.request_handler import RequestHandler


class AuditLogMethods:
    def __init__(self, request_handler: RequestHandler) -> None:
        self.request_handler = request_handler

    async def get_audit_log(
        self,
        guild_id: str,
        user_id: str | None = None,
        action_type: int | None = None,
        before: str | None = None,
        after: str | None = None,
        limit: int | None = None,
    ) -> dict[str, Any]:
        """Get a guild's audit log. Requires the VIEW_AUDIT_LOG permission.

        Args:
            guild_id: Guild to read.
            user_id: Only entries made by this user.
            action_type: Only entries of this audit log event type.
            before: Entries before this entry id.
            after: Entries after this entry id.
            limit: Number of entries, 1-100.
        """
        params = {
            "user_id": user_id,
            "action_type": action_type,
            "before": before,
            "after": after,
            "limit": limit,
        }
        return await self.request_handler.request(
            endpoints.guild_audit_logs(guild_id), params=params, method="get"
        )
