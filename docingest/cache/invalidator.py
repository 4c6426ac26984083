"""Cache keys and the one component allowed to invalidate them."""

from abc import ABC, abstractmethod
from collections.abc import Iterable

from docingest.logging.logger import Log

CacheKey = tuple[str, ...]


def documents_key() -> CacheKey:
    """Every document listing, across organizations and filters."""
    return ("documents",)


def folders_key(organization_id: str) -> CacheKey:
    return ("folders", organization_id)


def folder_documents_key(organization_id: str, folder_id: str) -> CacheKey:
    return ("folders", organization_id, folder_id, "documents")


class BaseQueryCache(ABC):
    """Contract for the external keyed query cache."""

    @abstractmethod
    def invalidate(self, key: CacheKey) -> None:
        """Mark every cached result under ``key`` as stale."""


class CacheInvalidator:
    """Declares which cached queries go stale after a mutation."""

    def __init__(self, cache: BaseQueryCache) -> None:
        self._cache = cache

    def invalidate(self, keys: Iterable[CacheKey]) -> None:
        for key in keys:
            Log.debug(f"Invalidating cache key {key}")
            self._cache.invalidate(key)

    @staticmethod
    def keys_after_upload(
        organization_id: str, view_scope_id: str | None = None
    ) -> list[CacheKey]:
        keys = [documents_key(), folders_key(organization_id)]
        if view_scope_id:
            keys.append(folder_documents_key(organization_id, view_scope_id))
        return keys

    def after_upload(self, organization_id: str, view_scope_id: str | None = None) -> None:
        self.invalidate(self.keys_after_upload(organization_id, view_scope_id))

    @staticmethod
    def keys_after_delete(organization_id: str, folder_id: str | None = None) -> list[CacheKey]:
        keys = [documents_key()]
        if folder_id:
            keys.append(folder_documents_key(organization_id, folder_id))
        return keys

    def after_delete(self, organization_id: str, folder_id: str | None = None) -> None:
        self.invalidate(self.keys_after_delete(organization_id, folder_id))
