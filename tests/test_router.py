"""Tests for route key derivation."""

from __future__ import annotations

import pytest

from discord_rest.ratelimit.router import RouteRules, routify

WEBHOOK_TOKEN = "a" * 34 + "-_" + "B9" * 16


class TestCollapsing:
    def test_minor_id_collapsed_major_id_kept(self) -> None:
        route = routify("/channels/123456789012345678/messages/987654321098765432", "GET")
        assert route == "/channels/123456789012345678/messages/:id"

    def test_guild_member_ids_collapse(self) -> None:
        assert routify("/guilds/1/members/2", "get") == "/guilds/1/members/:id"

    def test_different_major_ids_do_not_collide(self) -> None:
        assert routify("/channels/1/messages", "get") != routify("/channels/2/messages", "get")

    def test_same_shape_shares_key(self) -> None:
        a = routify("/channels/1/messages/100", "patch")
        b = routify("/channels/1/messages/200", "patch")
        assert a == b

    def test_users_id_collapsed(self) -> None:
        assert routify("/users/42", "get") == "/users/:id"
        assert routify("/users/@me", "get") == "/users/@me"

    def test_reaction_emoji_collapsed(self) -> None:
        route = routify("/channels/1/messages/2/reactions/%F0%9F%94%A5", "GET")
        assert route == "/channels/1/messages/:id/reactions/:id"

    def test_reaction_user_collapsed(self) -> None:
        route = routify("/channels/1/messages/2/reactions/party:55/33", "GET")
        assert route == "/channels/1/messages/:id/reactions/:id/:userID"

    def test_webhook_token_collapsed(self) -> None:
        assert len(WEBHOOK_TOKEN) >= 64
        route = routify(f"/webhooks/77/{WEBHOOK_TOKEN}", "POST")
        assert route == "/webhooks/77/:token"

    def test_short_webhook_segment_not_treated_as_token(self) -> None:
        assert routify("/webhooks/77/short", "get") == "/webhooks/77/short"


class TestMethodSpecificKeys:
    def test_delete_message_has_own_key(self) -> None:
        delete = routify("/channels/123/messages/456", "DELETE")
        get = routify("/channels/123/messages/456", "GET")
        patch = routify("/channels/123/messages/456", "PATCH")
        assert delete == "DELETE/channels/123/messages/:id"
        assert delete != get
        assert get == patch

    def test_delete_prefix_uppercased(self) -> None:
        assert routify("/channels/123/messages/456", "delete") == "DELETE/channels/123/messages/:id"

    def test_reaction_modifications_share_key(self) -> None:
        put = routify("/channels/1/messages/2/reactions/x/@me", "PUT")
        delete = routify("/channels/1/messages/3/reactions/y/44", "DELETE")
        assert put == delete == "MODIFY/channels/1/messages/:id/reactions"


class TestPurity:
    @pytest.mark.parametrize(
        ("url", "method"),
        [
            ("/channels/1/messages/2", "get"),
            ("/guilds/1/bans/9", "put"),
            (f"/webhooks/5/{WEBHOOK_TOKEN}/messages/8", "delete"),
        ],
    )
    def test_deterministic(self, url: str, method: str) -> None:
        assert routify(url, method) == routify(url, method)

    def test_custom_major_collections(self) -> None:
        rules = RouteRules(major_collections=frozenset({"users"}))
        assert routify("/users/42/channels", "get", rules) == "/users/42/channels"
        assert routify("/channels/1/messages", "get", rules) == "/channels/:id/messages"
