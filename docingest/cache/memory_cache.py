from collections.abc import Awaitable, Callable
from typing import Any

from docingest.cache.invalidator import BaseQueryCache, CacheKey


class InMemoryQueryCache(BaseQueryCache):
    """Read-through cache with prefix invalidation.

    Invalidating ``("folders", "org-1")`` also drops
    ``("folders", "org-1", "f-1", "documents")``.
    """

    def __init__(self) -> None:
        self._entries: dict[CacheKey, Any] = {}

    async def get_or_fetch(self, key: CacheKey, fetch: Callable[[], Awaitable[Any]]) -> Any:
        if key in self._entries:
            return self._entries[key]
        value = await fetch()
        self._entries[key] = value
        return value

    def get(self, key: CacheKey) -> Any | None:
        return self._entries.get(key)

    def invalidate(self, key: CacheKey) -> None:
        stale = [cached for cached in self._entries if cached[: len(key)] == key]
        for cached in stale:
            del self._entries[cached]

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)
