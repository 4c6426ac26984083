"""Resolves "documents in folder X" against an unreliable backend.

Primary: the name-indexed listing, filtered client-side to the folder scope
because it is not trusted to be pre-filtered. Fallback, on hard failure only:
a storage path-prefix listing, kept only where the path sits under the prefix.
Neither available: an empty list. Nothing here raises.
"""

from docingest.api.base import BaseDocumentApi
from docingest.api.exceptions import DocumentApiError
from docingest.documents.models import DocumentList, FolderScope
from docingest.documents.normalizer import normalize_many
from docingest.logging.logger import Log


def folder_path_prefix(organization_name: str, folder_name: str) -> str:
    return f"{organization_name}/original/{folder_name}"


class FolderDocumentsResolver:
    def __init__(self, *, api: BaseDocumentApi, organization_name: str) -> None:
        self._api = api
        self._organization_name = organization_name

    async def resolve(
        self, organization_id: str, folder_id: str | None, folder_name: str
    ) -> DocumentList:
        scope = FolderScope(folder_id=folder_id, folder_name=folder_name)
        try:
            page = await self._api.list_documents(
                organization_id, {"folder_name": folder_name}
            )
        except DocumentApiError as exc:
            Log.warning(f"Folder lookup for '{folder_name}' failed, using path prefix: {exc}")
            return await self._resolve_by_prefix(organization_id, folder_name)

        documents = normalize_many(page.documents)
        in_scope = [doc for doc in documents if scope.contains(doc)]
        dropped = len(documents) - len(in_scope)
        if dropped:
            Log.warning(
                f"Dropped {dropped} document(s) outside folder '{folder_name}' "
                f"from the folder listing"
            )
        return DocumentList.of(in_scope, page=page.page, per_page=page.per_page)

    async def _resolve_by_prefix(self, organization_id: str, folder_name: str) -> DocumentList:
        prefix = folder_path_prefix(self._organization_name, folder_name)
        try:
            page = await self._api.list_documents(organization_id, {"path_prefix": prefix})
        except DocumentApiError as exc:
            Log.warning(f"Prefix listing for '{prefix}' failed, returning no documents: {exc}")
            return DocumentList.empty()
        # The backend may ignore or loosely match the prefix; "Invoices2/" must not pass.
        under_prefix = [
            doc
            for doc in normalize_many(page.documents)
            if doc.storage_path is not None and doc.storage_path.startswith(f"{prefix}/")
        ]
        dropped = len(page.documents) - len(under_prefix)
        if dropped:
            Log.warning(f"Dropped {dropped} document(s) outside '{prefix}/' from the fallback")
        return DocumentList.of(under_prefix, page=page.page, per_page=page.per_page)
