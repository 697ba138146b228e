"""Channel, message, reaction and pin endpoints."""

from __future__ import annotations

from typing import Any

from discord_rest import endpoints
from discord_rest.api.request_handler import RequestHandler
from discord_rest.config import ClientOptions
from discord_rest.constants import (
    BULK_DELETE_MESSAGES_MAX,
    BULK_DELETE_MESSAGES_MIN,
    GET_CHANNEL_MESSAGES_MAX_RESULTS,
    GET_CHANNEL_MESSAGES_MIN_RESULTS,
)

FileSpec = dict[str, Any]  # {"name": "image.png", "file": b"..."}


class ChannelMethods:
    """Methods for channels and the messages in them.

    Messages sent through `create_message` and `edit_message` get the
    client's default `allowed_mentions` unless the payload sets its own.
    """

    def __init__(self, request_handler: RequestHandler, options: ClientOptions) -> None:
        self.request_handler = request_handler
        self.options = options

    # -- Channels --

    async def get_channel(self, channel_id: str) -> dict[str, Any]:
        return await self.request_handler.request(endpoints.channel(channel_id), method="get")

    async def update_channel(self, channel_id: str, data: dict[str, Any]) -> dict[str, Any]:
        """Update a guild channel or thread. A `reason` key becomes the audit log reason."""
        return await self.request_handler.request(
            endpoints.channel(channel_id), method="patch", data=data
        )

    async def delete_channel(self, channel_id: str, reason: str | None = None) -> dict[str, Any]:
        """Delete a guild channel or thread, or close a DM."""
        return await self.request_handler.request(
            endpoints.channel(channel_id), method="delete", data={"reason": reason}
        )

    # -- Messages --

    async def get_channel_messages(
        self,
        channel_id: str,
        limit: int = 50,
        around: str | None = None,
        before: str | None = None,
        after: str | None = None,
    ) -> list[dict[str, Any]]:
        """Get up to 100 messages from a channel.

        Args:
            channel_id: Channel to read from.
            limit: Number of messages, 1-100.
            around: Get messages around this message id.
            before: Get messages before this message id.
            after: Get messages after this message id.

        Raises:
            ValueError: limit is out of range.
        """
        if not GET_CHANNEL_MESSAGES_MIN_RESULTS <= limit <= GET_CHANNEL_MESSAGES_MAX_RESULTS:
            msg = (
                f"limit must be between {GET_CHANNEL_MESSAGES_MIN_RESULTS} "
                f"and {GET_CHANNEL_MESSAGES_MAX_RESULTS}, got {limit}"
            )
            raise ValueError(msg)
        params = {"limit": limit, "around": around, "before": before, "after": after}
        return await self.request_handler.request(
            endpoints.channel_messages(channel_id), params=params, method="get"
        )

    async def get_channel_message(self, channel_id: str, message_id: str) -> dict[str, Any]:
        return await self.request_handler.request(
            endpoints.channel_message(channel_id, message_id), method="get"
        )

    async def create_message(
        self,
        channel_id: str,
        data: str | dict[str, Any],
        files: list[FileSpec] | None = None,
    ) -> dict[str, Any]:
        """Send a message. Sent as multipart/form-data when files are attached.

        Args:
            channel_id: Channel to post in.
            data: Message content, or a full message payload.
            files: Attachments as {"name": ..., "file": bytes}.
        """
        payload = self._message_payload(data)
        if files:
            return await self.request_handler.request(
                endpoints.channel_messages(channel_id),
                method="post",
                data_type="multipart",
                data={**payload, "files": files},
            )
        return await self.request_handler.request(
            endpoints.channel_messages(channel_id), method="post", data=payload
        )

    async def edit_message(
        self, channel_id: str, message_id: str, data: str | dict[str, Any]
    ) -> dict[str, Any]:
        return await self.request_handler.request(
            endpoints.channel_message(channel_id, message_id),
            method="patch",
            data=self._message_payload(data),
        )

    async def delete_message(
        self, channel_id: str, message_id: str, reason: str | None = None
    ) -> None:
        await self.request_handler.request(
            endpoints.channel_message(channel_id, message_id),
            method="delete",
            data={"reason": reason},
        )

    async def bulk_delete_messages(
        self, channel_id: str, message_ids: list[str], reason: str | None = None
    ) -> None:
        """Delete 2-100 messages at once. Messages older than two weeks are rejected by the API."""
        if not BULK_DELETE_MESSAGES_MIN <= len(message_ids) <= BULK_DELETE_MESSAGES_MAX:
            msg = (
                f"Bulk delete takes {BULK_DELETE_MESSAGES_MIN}-{BULK_DELETE_MESSAGES_MAX} "
                f"message ids, got {len(message_ids)}"
            )
            raise ValueError(msg)
        await self.request_handler.request(
            endpoints.channel_bulk_delete(channel_id),
            method="post",
            data={"messages": message_ids, "reason": reason},
        )

    def _message_payload(self, data: str | dict[str, Any]) -> dict[str, Any]:
        payload = {"content": data} if isinstance(data, str) else dict(data)
        if self.options.allowed_mentions is not None:
            payload.setdefault("allowed_mentions", self.options.allowed_mentions)
        return payload

    # -- Reactions --

    async def create_reaction(self, channel_id: str, message_id: str, emoji: str) -> None:
        """React to a message as the current user. Custom emoji use the `name:id` form."""
        await self.request_handler.request(
            endpoints.channel_message_reaction_user(channel_id, message_id, emoji, "@me"),
            method="put",
        )

    async def delete_reaction(
        self, channel_id: str, message_id: str, emoji: str, user_id: str = "@me"
    ) -> None:
        await self.request_handler.request(
            endpoints.channel_message_reaction_user(channel_id, message_id, emoji, user_id),
            method="delete",
        )

    async def get_reactions(
        self,
        channel_id: str,
        message_id: str,
        emoji: str,
        after: str | None = None,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        return await self.request_handler.request(
            endpoints.channel_message_reaction(channel_id, message_id, emoji),
            params={"after": after, "limit": limit},
            method="get",
        )

    async def delete_all_reactions(self, channel_id: str, message_id: str) -> None:
        await self.request_handler.request(
            endpoints.channel_message_reactions(channel_id, message_id), method="delete"
        )

    # -- Typing / pins --

    async def start_channel_typing(self, channel_id: str) -> None:
        await self.request_handler.request(endpoints.channel_typing(channel_id), method="post")

    async def get_channel_pinned_messages(self, channel_id: str) -> list[dict[str, Any]]:
        return await self.request_handler.request(endpoints.channel_pins(channel_id), method="get")

    async def add_channel_pinned_message(
        self, channel_id: str, message_id: str, reason: str | None = None
    ) -> None:
        await self.request_handler.request(
            endpoints.channel_pin(channel_id, message_id), method="put", data={"reason": reason}
        )

    async def remove_channel_pinned_message(
        self, channel_id: str, message_id: str, reason: str | None = None
    ) -> None:
        await self.request_handler.request(
            endpoints.channel_pin(channel_id, message_id), method="delete", data={"reason": reason}
        )
