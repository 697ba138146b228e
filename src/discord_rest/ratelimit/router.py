"""Reduce request paths to rate limit route keys."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

_ROUTE_RE = re.compile(r"/([a-z-]+)/(?:\d+)")
_REACTIONS_RE = re.compile(r"/reactions/[^/]+")
_REACTIONS_USER_RE = re.compile(r"/reactions/:id/[^/]+")
_WEBHOOK_TOKEN_RE = re.compile(r"^/webhooks/(\d+)/[A-Za-z0-9\-_]{64,}")
_MESSAGE_RE = re.compile(r"/messages/:id$")

DEFAULT_MAJOR_COLLECTIONS = frozenset({"channels", "guilds", "webhooks"})


@dataclass(frozen=True)
class RouteRules:
    """Server-defined routing data.

    Ids that follow a *major* collection name identify the resource that owns
    the quota, so they are kept verbatim instead of collapsed to `:id`.
    """

    major_collections: frozenset[str] = field(default=DEFAULT_MAJOR_COLLECTIONS)


DEFAULT_ROUTE_RULES = RouteRules()


def routify(url: str, method: str, rules: RouteRules = DEFAULT_ROUTE_RULES) -> str:
    """Return the bucket key for a request.

    >>> routify("/channels/1234/messages/5678", "get")
    '/channels/1234/messages/:id'
    >>> routify("/channels/1234/messages/5678", "delete")
    'DELETE/channels/1234/messages/:id'
    """

    def collapse(match: re.Match[str]) -> str:
        collection = match.group(1)
        if collection in rules.major_collections:
            return match.group(0)
        return f"/{collection}/:id"

    route = _ROUTE_RE.sub(collapse, url)
    route = _REACTIONS_RE.sub("/reactions/:id", route)
    route = _REACTIONS_USER_RE.sub("/reactions/:id/:userID", route)
    route = _WEBHOOK_TOKEN_RE.sub(r"/webhooks/\1/:token", route)

    verb = method.upper()
    # Message deletion has its own quota, separate from other message calls
    if verb == "DELETE" and _MESSAGE_RE.search(route):
        route = verb + route

    # Adding and removing reactions share one quota per channel
    if verb in ("PUT", "DELETE"):
        index = route.find("/reactions")
        if index != -1:
            route = "MODIFY" + route[: index + len("/reactions")]
    return route
