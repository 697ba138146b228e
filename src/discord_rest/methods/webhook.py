"""Webhook endpoints.

Calls that carry a webhook token in the path need no bot authorization;
they share rate limits per webhook id, not per token.
"""

from __future__ import annotations

from typing import Any

from discord_rest import endpoints
from discord_rest.api.request_handler import RequestHandler
from discord_rest.config import ClientOptions

FileSpec = dict[str, Any]


def _webhook_path(webhook_id: str, token: str | None) -> str:
    return endpoints.webhook_token(webhook_id, token) if token else endpoints.webhook(webhook_id)


class WebhookMethods:
    def __init__(self, request_handler: RequestHandler, options: ClientOptions) -> None:
        self.request_handler = request_handler
        self.options = options

    async def create_webhook(self, channel_id: str, data: dict[str, Any]) -> dict[str, Any]:
        """Create a webhook in a channel. `data` needs at least a `name`."""
        return await self.request_handler.request(
            endpoints.channel_webhooks(channel_id), method="post", data=data
        )

    async def get_webhooks(
        self, channel_id: str | None = None, guild_id: str | None = None
    ) -> list[dict[str, Any]]:
        """List the webhooks of a channel or of a whole guild."""
        if channel_id:
            path = endpoints.channel_webhooks(channel_id)
        elif guild_id:
            path = endpoints.guild_webhooks(guild_id)
        else:
            msg = "Either channel_id or guild_id is required"
            raise ValueError(msg)
        return await self.request_handler.request(path, method="get")

    async def get_webhook(self, webhook_id: str, token: str | None = None) -> dict[str, Any]:
        return await self.request_handler.request(_webhook_path(webhook_id, token), method="get")

    async def update_webhook(
        self, webhook_id: str, data: dict[str, Any], token: str | None = None
    ) -> dict[str, Any]:
        return await self.request_handler.request(
            _webhook_path(webhook_id, token), method="patch", data=data
        )

    async def delete_webhook(
        self, webhook_id: str, token: str | None = None, reason: str | None = None
    ) -> None:
        await self.request_handler.request(
            _webhook_path(webhook_id, token), method="delete", data={"reason": reason}
        )

    async def execute_webhook(
        self,
        webhook_id: str,
        token: str,
        data: str | dict[str, Any],
        files: list[FileSpec] | None = None,
        wait: bool = False,
        thread_id: str | None = None,
    ) -> dict[str, Any] | None:
        """Post a message through a webhook.

        Returns the created message when `wait` is set, otherwise None.
        """
        payload = {"content": data} if isinstance(data, str) else dict(data)
        if self.options.allowed_mentions is not None:
            payload.setdefault("allowed_mentions", self.options.allowed_mentions)
        params = {"wait": str(wait).lower(), "thread_id": thread_id}
        path = endpoints.webhook_token(webhook_id, token)
        if files:
            return await self.request_handler.request(
                path,
                params=params,
                method="post",
                data_type="multipart",
                data={**payload, "files": files},
            )
        return await self.request_handler.request(path, params=params, method="post", data=payload)

    async def edit_webhook_message(
        self, webhook_id: str, token: str, message_id: str, data: dict[str, Any]
    ) -> dict[str, Any]:
        return await self.request_handler.request(
            endpoints.webhook_token_message(webhook_id, token, message_id),
            method="patch",
            data=data,
        )

    async def delete_webhook_message(self, webhook_id: str, token: str, message_id: str) -> None:
        await self.request_handler.request(
            endpoints.webhook_token_message(webhook_id, token, message_id), method="delete"
        )
