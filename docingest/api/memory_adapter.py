"""In-process document API adapter.

No network calls. Useful for local development, integration tests, and as a
template for new backend adapters: implement BaseDocumentApi and register the
engine in DocumentApiFactory.
"""

import uuid
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from docingest.api.base import BaseDocumentApi, ProgressCallback
from docingest.api.exceptions import DocumentApiNetworkError
from docingest.api.httpx_adapter import (
    CANNOT_CONNECT,
    DELETE_NETWORK_ERROR,
    DOCUMENT_NOT_FOUND,
    FOLDER_REQUIRED,
    build_target_path,
)
from docingest.deletion.models import DeleteFailure, DeleteOutcome, DeleteSuccess
from docingest.documents.models import (
    DocumentPage,
    ExistingDocumentInfo,
    path_folder_segment,
)
from docingest.documents.normalizer import normalize
from docingest.upload.models import (
    UploadDuplicate,
    UploadFailure,
    UploadFile,
    UploadOutcome,
    UploadSuccess,
)


class InMemoryDocumentApi(BaseDocumentApi):
    """Keeps documents in a dict keyed by storage path."""

    def __init__(
        self,
        *,
        organization_name: str,
        folders: Mapping[str, str] | None = None,
    ) -> None:
        self._organization_name = organization_name
        self._folders: dict[str, str] = dict(folders or {})
        self._records: dict[str, dict[str, Any]] = {}
        self.available = True

    def add_folder(self, folder_id: str, folder_name: str) -> None:
        self._folders[folder_id] = folder_name

    def add_record(self, record: Mapping[str, Any]) -> None:
        """Seed a raw record, as if another client had uploaded it."""
        key = str(
            record.get("storage_path")
            or record.get("gcs_path")
            or record.get("path")
            or record.get("id")
            or uuid.uuid4().hex
        )
        self._records[key] = dict(record)

    async def upload(
        self,
        file: UploadFile,
        organization_id: str,
        folder_id: str | None = None,
        on_progress: ProgressCallback | None = None,
        force_override: bool = False,
    ) -> UploadOutcome:
        if not self.available:
            return UploadFailure(CANNOT_CONNECT)
        if not folder_id:
            return UploadFailure(FOLDER_REQUIRED)
        folder_name = self._folders.get(folder_id)
        if folder_name is None:
            return UploadFailure(
                f"Unable to resolve folder ({folder_id}). Upload cannot proceed."
            )

        path = build_target_path(self._organization_name, folder_name, file.name)
        existing = self._records.get(path)
        if existing is not None and not force_override:
            return UploadDuplicate(
                ExistingDocumentInfo(
                    id=existing.get("id"),
                    filename=existing.get("filename") or file.name,
                    created_at=existing.get("created_at"),
                    uploaded_by=existing.get("uploaded_by"),
                )
            )

        if on_progress is not None:
            on_progress(file.size_bytes, file.size_bytes)

        record = {
            "id": (existing or {}).get("id") or uuid.uuid4().hex,
            "filename": file.name,
            "content_type": file.content_type,
            "file_size": file.size_bytes,
            "status": "uploaded",
            "created_at": datetime.now(timezone.utc).isoformat(),
            "organization_id": organization_id,
            "folder_id": folder_id,
            "gcs_path": path,
        }
        self._records[path] = record
        return UploadSuccess(normalize(record))

    async def list_documents(
        self,
        organization_id: str,
        filters: Mapping[str, Any] | None = None,
    ) -> DocumentPage:
        if not self.available:
            raise DocumentApiNetworkError("In-memory backend marked unavailable")
        filters = filters or {}
        folder_name = filters.get("folder_name")
        prefix = filters.get("path_prefix")

        records = []
        for path, record in self._records.items():
            if record.get("organization_id") not in (None, organization_id):
                continue
            record_folder = record.get("folder_name") or path_folder_segment(path)
            if folder_name is not None and record_folder != folder_name:
                continue
            if prefix is not None and not path.startswith(f"{prefix}/"):
                continue
            records.append(dict(record))
        return DocumentPage(documents=records, total=len(records), total_pages=1)

    async def delete(self, document_id: str) -> DeleteOutcome:
        if not self.available:
            return DeleteFailure(DELETE_NETWORK_ERROR)
        key = next(
            (
                path
                for path, record in self._records.items()
                if str(record.get("id") or record.get("document_id")) == document_id
            ),
            None,
        )
        if key is None:
            return DeleteFailure(DOCUMENT_NOT_FOUND)
        del self._records[key]
        return DeleteSuccess(document_id)
