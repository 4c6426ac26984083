from collections.abc import Mapping
from typing import Any

from docingest.api.base import BaseDocumentApi
from docingest.api.exceptions import DocumentApiError
from docingest.documents.models import DocumentList
from docingest.documents.normalizer import normalize_many
from docingest.logging.logger import Log


class DocumentLister:
    """Organization-wide document listing, normalized.

    Degrades to an empty list when the backend is unavailable.
    """

    def __init__(self, *, api: BaseDocumentApi) -> None:
        self._api = api

    async def list_all(
        self, organization_id: str, filters: Mapping[str, Any] | None = None
    ) -> DocumentList:
        if not organization_id:
            Log.warning("No organization id provided, returning empty document list")
            return DocumentList.empty()
        try:
            page = await self._api.list_documents(organization_id, filters)
        except DocumentApiError as exc:
            Log.warning(f"Listing documents for {organization_id} failed: {exc}")
            return DocumentList.empty()

        documents = normalize_many(page.documents)
        Log.info(f"Listed {len(documents)} of {page.total} document(s) for {organization_id}")
        return DocumentList(
            documents=documents,
            total=page.total,
            page=page.page,
            per_page=page.per_page,
            total_pages=page.total_pages,
        )
