"""Client configuration."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from discord_rest import __version__
from discord_rest.constants import BASE_HOST, BASE_URL, DEFAULT_RETRY_LIMIT

DEFAULT_USER_AGENT = f"DiscordBot (https://github.com/discord-rest/discord-rest, {__version__})"


class ClientOptions(BaseModel):
    """Options for a RestClient and its request handler."""

    base_host: str = BASE_HOST
    user_agent: str = DEFAULT_USER_AGENT
    # Default allowed_mentions sent when creating/editing messages
    allowed_mentions: dict[str, Any] | None = None
    # Skip every rate limit bucket. Only safe behind a proxy that does the limiting.
    bypass_buckets: bool = False
    # Retry failed requests that can be retried, up to retry_limit times
    retry_requests: bool = False
    retry_limit: int = Field(default=DEFAULT_RETRY_LIMIT, ge=0)

    model_config = {"extra": "forbid"}

    @property
    def api_url(self) -> str:
        return self.base_host.rstrip("/") + BASE_URL
