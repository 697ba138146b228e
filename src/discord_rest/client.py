"""REST client facade: wires options, limiter, handler and method groups."""

from __future__ import annotations

import logging
from types import TracebackType

from discord_rest.api.request_handler import RequestHandler
from discord_rest.api.transport import Transport
from discord_rest.config import ClientOptions
from discord_rest.methods.audit_log import AuditLogMethods
from discord_rest.methods.bot import BotMethods
from discord_rest.methods.channel import ChannelMethods
from discord_rest.methods.emoji import EmojiMethods
from discord_rest.methods.guild import GuildMethods
from discord_rest.methods.invite import InviteMethods
from discord_rest.methods.user import UserMethods
from discord_rest.methods.voice import VoiceMethods
from discord_rest.methods.webhook import WebhookMethods
from discord_rest.ratelimit.limiter import Ratelimiter

logger = logging.getLogger(__name__)


class RestClient:
    """Async client for the Discord REST API.

    Use as an async context manager so the HTTP session gets closed::

        async with RestClient("Bot TOKEN") as client:
            me = await client.user.get_self()

    The token is sent verbatim as the Authorization header. It may be
    omitted for calls that authenticate through the path (webhook tokens).
    """

    def __init__(
        self,
        token: str | None = None,
        options: ClientOptions | None = None,
        transport: Transport | None = None,
    ) -> None:
        if token is not None and token == "":
            msg = "Missing token"
            raise ValueError(msg)
        self.token = token
        self.options = options or ClientOptions()
        self.ratelimiter = Ratelimiter()
        self.request_handler = RequestHandler(
            self.ratelimiter, self.options, token=token, transport=transport
        )
        self.audit_log = AuditLogMethods(self.request_handler)
        self.bot = BotMethods(self.request_handler)
        self.channel = ChannelMethods(self.request_handler, self.options)
        self.emoji = EmojiMethods(self.request_handler)
        self.guild = GuildMethods(self.request_handler)
        self.invite = InviteMethods(self.request_handler)
        self.user = UserMethods(self.request_handler)
        self.voice = VoiceMethods(self.request_handler)
        self.webhook = WebhookMethods(self.request_handler, self.options)
        logger.info("REST client ready for %s", self.options.api_url)

    async def close(self) -> None:
        await self.request_handler.close()

    async def __aenter__(self) -> RestClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.close()
