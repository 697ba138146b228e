"""Path templates for the REST endpoints the method groups call."""

from __future__ import annotations

from urllib.parse import quote

CHANNELS = "/channels"
GATEWAY = "/gateway"
GATEWAY_BOT = "/gateway/bot"
GUILDS = "/guilds"
USERS = "/users"
VOICE_REGIONS = "/voice/regions"


def oauth2_application(app_id: str) -> str:
    return f"/oauth2/applications/{app_id}"


# -- Channels --


def channel(channel_id: str) -> str:
    return f"{CHANNELS}/{channel_id}"


def channel_messages(channel_id: str) -> str:
    return f"{channel(channel_id)}/messages"


def channel_message(channel_id: str, message_id: str) -> str:
    return f"{channel_messages(channel_id)}/{message_id}"


def channel_bulk_delete(channel_id: str) -> str:
    return f"{channel_messages(channel_id)}/bulk-delete"


def channel_message_reactions(channel_id: str, message_id: str) -> str:
    return f"{channel_message(channel_id, message_id)}/reactions"


def channel_message_reaction(channel_id: str, message_id: str, emoji: str) -> str:
    # Unicode emoji must be percent-encoded; custom emoji are "name:id"
    return f"{channel_message_reactions(channel_id, message_id)}/{quote(emoji, safe=':')}"


def channel_message_reaction_user(
    channel_id: str, message_id: str, emoji: str, user_id: str
) -> str:
    return f"{channel_message_reaction(channel_id, message_id, emoji)}/{user_id}"


def channel_pins(channel_id: str) -> str:
    return f"{channel(channel_id)}/pins"


def channel_pin(channel_id: str, message_id: str) -> str:
    return f"{channel_pins(channel_id)}/{message_id}"


def channel_typing(channel_id: str) -> str:
    return f"{channel(channel_id)}/typing"


def channel_webhooks(channel_id: str) -> str:
    return f"{channel(channel_id)}/webhooks"


# -- Guilds --


def guild(guild_id: str) -> str:
    return f"{GUILDS}/{guild_id}"


def guild_channels(guild_id: str) -> str:
    return f"{guild(guild_id)}/channels"


def guild_members(guild_id: str) -> str:
    return f"{guild(guild_id)}/members"


def guild_member(guild_id: str, member_id: str) -> str:
    return f"{guild_members(guild_id)}/{member_id}"


def guild_member_role(guild_id: str, member_id: str, role_id: str) -> str:
    return f"{guild_member(guild_id, member_id)}/roles/{role_id}"


def guild_bans(guild_id: str) -> str:
    return f"{guild(guild_id)}/bans"


def guild_ban(guild_id: str, user_id: str) -> str:
    return f"{guild_bans(guild_id)}/{user_id}"


def guild_roles(guild_id: str) -> str:
    return f"{guild(guild_id)}/roles"


def guild_role(guild_id: str, role_id: str) -> str:
    return f"{guild_roles(guild_id)}/{role_id}"


def guild_prune(guild_id: str) -> str:
    return f"{guild(guild_id)}/prune"


def guild_audit_logs(guild_id: str) -> str:
    return f"{guild(guild_id)}/audit-logs"


def guild_emojis(guild_id: str) -> str:
    return f"{guild(guild_id)}/emojis"


def guild_emoji(guild_id: str, emoji_id: str) -> str:
    return f"{guild_emojis(guild_id)}/{emoji_id}"


# -- Users --


def user(user_id: str) -> str:
    return f"{USERS}/{user_id}"


def user_channels(user_id: str) -> str:
    return f"{user(user_id)}/channels"


def user_guilds(user_id: str) -> str:
    return f"{user(user_id)}/guilds"


def user_guild(user_id: str, guild_id: str) -> str:
    return f"{user_guilds(user_id)}/{guild_id}"


# -- Webhooks / invites --


def webhook(webhook_id: str) -> str:
    return f"/webhooks/{webhook_id}"


def webhook_token(webhook_id: str, token: str) -> str:
    return f"{webhook(webhook_id)}/{token}"


def webhook_token_message(webhook_id: str, token: str, message_id: str) -> str:
    return f"{webhook_token(webhook_id, token)}/messages/{message_id}"


def guild_webhooks(guild_id: str) -> str:
    return f"{guild(guild_id)}/webhooks"


def invite(code: str) -> str:
    return f"/invites/{code}"
