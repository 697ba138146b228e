"""Small in-memory caches layered over REST calls."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any

from discord_rest.methods.user import UserMethods


class DewCache:
    """A plain mapping plus helpers to fill it from awaitables."""

    def __init__(self) -> None:
        self._data: dict[str, Any] = {}

    def __contains__(self, key: str) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value

    def delete(self, key: str) -> bool:
        if key not in self._data:
            return False
        del self._data[key]
        return True

    def clear(self) -> None:
        self._data.clear()

    async def wrap(self, key: str, awaitable: Awaitable[Any]) -> Any:
        """Await `awaitable`, store the result under `key` and return it."""
        value = await awaitable
        self._data[key] = value
        return value

    async def fetch(self, key: str, fallback: Callable[[str], Awaitable[Any]]) -> Any:
        """Return the cached value, or await `fallback(key)` on a miss.

        The fallback result is not stored; use `wrap` for that.
        """
        if key in self._data:
            return self._data[key]
        return await fallback(key)


class UserCache(DewCache):
    """Caches user objects fetched through the users endpoint."""

    def __init__(self, users: UserMethods) -> None:
        super().__init__()
        self.users = users

    async def fetch_user(self, user_id: str) -> dict[str, Any]:
        if user_id in self:
            return self.get(user_id)
        return await self.wrap(user_id, self.users.get_user(user_id))
