"""Document API adapter for the real backend, built on httpx."""

import io
from collections.abc import Mapping
from typing import Any

import httpx

from docingest.api.base import BaseDocumentApi, ProgressCallback
from docingest.api.error_messages import GENERIC_ERROR, normalize_error_message
from docingest.api.exceptions import (
    DocumentApiAuthError,
    DocumentApiError,
    DocumentApiNetworkError,
    DocumentApiStatusError,
    MalformedResponseError,
)
from docingest.deletion.models import DeleteFailure, DeleteOutcome, DeleteSuccess
from docingest.documents.envelope import parse_document_page, unwrap_envelope
from docingest.documents.models import DocumentPage, ExistingDocumentInfo
from docingest.documents.normalizer import normalize
from docingest.logging.logger import Log
from docingest.upload.models import (
    UploadDuplicate,
    UploadFailure,
    UploadFile,
    UploadOutcome,
    UploadSuccess,
)

FOLDER_REQUIRED = (
    "Folder selection is required. The API does not support root-level document uploads."
)
CANNOT_CONNECT = "Cannot connect to the server. Please check your connection."
UPLOAD_TIMED_OUT = "Upload timed out. Please try a smaller file or retry."
AUTH_FAILED = "Authentication failed. Please log in again."
UPLOAD_FAILED = "Upload failed. Please try again."
DOCUMENT_NOT_FOUND = "Document not found. It may have already been deleted."
DELETE_DENIED = "Access denied. You do not have permission to delete this document."
DELETE_NETWORK_ERROR = "Network error: Unable to connect to the server."

_AUTH_STATUSES = frozenset({401, 403})


def build_target_path(organization_name: str, folder_name: str, file_name: str) -> str:
    """Storage path for an original upload: ``{org}/original/{folder}/{file}``."""
    return f"{organization_name}/original/{folder_name}/{file_name}"


class _ProgressReader(io.BytesIO):
    """Reports (loaded, total) to a callback as httpx streams the body."""

    def __init__(self, data: bytes, on_progress: ProgressCallback | None) -> None:
        super().__init__(data)
        self._total = len(data)
        self._on_progress = on_progress

    def read(self, size: int | None = -1) -> bytes:
        chunk = super().read(size)
        if chunk and self._on_progress is not None:
            self._on_progress(self.tell(), self._total)
        return chunk


class HttpxDocumentApi(BaseDocumentApi):
    """Talks to the documents backend over HTTP."""

    def __init__(
        self,
        *,
        base_url: str,
        organization_name: str,
        timeout_seconds: int = 30,
        api_token: str = "",
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._organization_name = organization_name
        self._timeout_seconds = timeout_seconds
        self._api_token = api_token
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            headers = {"Accept": "application/json"}
            if self._api_token:
                headers["Authorization"] = f"Bearer {self._api_token}"
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=httpx.Timeout(self._timeout_seconds),
                headers=headers,
                transport=self._transport,
            )
        return self._client

    async def aclose(self) -> None:
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
        self._client = None

    async def upload(
        self,
        file: UploadFile,
        organization_id: str,
        folder_id: str | None = None,
        on_progress: ProgressCallback | None = None,
        force_override: bool = False,
    ) -> UploadOutcome:
        if not folder_id:
            return UploadFailure(FOLDER_REQUIRED)

        try:
            folder_name = await self._resolve_folder_name(organization_id, folder_id)
        except DocumentApiError as exc:
            Log.warning(f"Folder lookup failed for {folder_id}: {exc}")
            return UploadFailure(
                f"Unable to resolve folder ({folder_id}). Upload cannot proceed."
            )

        form = {
            "target_path": build_target_path(self._organization_name, folder_name, file.name),
            "folder_id": folder_id,
        }
        if force_override:
            form["force_override"] = "true"
        files = {
            "file": (
                file.name,
                _ProgressReader(file.data, on_progress),
                file.content_type or "application/octet-stream",
            )
        }

        try:
            response = await self._get_client().post(
                "/documents/upload", data=form, files=files
            )
        except httpx.TimeoutException:
            return UploadFailure(UPLOAD_TIMED_OUT)
        except httpx.TransportError as exc:
            Log.warning(f"Upload transport error for {file.name}: {exc}")
            return UploadFailure(CANNOT_CONNECT)
        except httpx.HTTPError as exc:
            Log.warning(f"Upload request error for {file.name}: {exc}")
            return UploadFailure(UPLOAD_FAILED)

        return self._classify_upload_response(response)

    async def list_documents(
        self,
        organization_id: str,
        filters: Mapping[str, Any] | None = None,
    ) -> DocumentPage:
        params = {k: v for k, v in (filters or {}).items() if v is not None}
        Log.debug(f"Listing documents for organization {organization_id}: {params}")
        response = await self._get("/documents", params=params)
        return parse_document_page(self._json(response))

    async def delete(self, document_id: str) -> DeleteOutcome:
        try:
            response = await self._get_client().delete(f"/documents/{document_id}")
        except httpx.HTTPError as exc:
            Log.warning(f"Delete request error for {document_id}: {exc}")
            return DeleteFailure(DELETE_NETWORK_ERROR)

        status = response.status_code
        if response.is_success:
            return DeleteSuccess(document_id)
        if status == 404:
            return DeleteFailure(DOCUMENT_NOT_FOUND)
        if status in _AUTH_STATUSES:
            return DeleteFailure(DELETE_DENIED)
        detail = _error_detail(_json_or_none(response))
        Log.error(f"Delete of {document_id} rejected with {status}: {detail}")
        if status == 500:
            return DeleteFailure(f"Server error: {detail or 'Please try again later.'}")
        return DeleteFailure(f"Delete failed ({status}): {detail or 'Unknown error'}")

    async def _resolve_folder_name(self, organization_id: str, folder_id: str) -> str:
        response = await self._get(f"/organizations/{organization_id}/folders/{folder_id}")
        body = unwrap_envelope(self._json(response))
        name = body.get("name") if isinstance(body, Mapping) else None
        if not isinstance(name, str) or not name:
            raise MalformedResponseError(f"Folder {folder_id} has no name")
        return name

    async def _get(self, url: str, params: Mapping[str, Any] | None = None) -> httpx.Response:
        try:
            response = await self._get_client().get(url, params=params)
        except httpx.TimeoutException as exc:
            raise DocumentApiNetworkError(f"Request to {url} timed out") from exc
        except httpx.HTTPError as exc:
            raise DocumentApiNetworkError(f"Request to {url} failed: {exc}") from exc

        status = response.status_code
        if status in _AUTH_STATUSES:
            raise DocumentApiAuthError(
                "Access denied. Please log in again to view documents.", status
            )
        if response.is_error:
            raise DocumentApiStatusError(f"Documents API returned {status}", status)
        return response

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise MalformedResponseError(f"Response is not JSON: {exc}") from exc

    def _classify_upload_response(self, response: httpx.Response) -> UploadOutcome:
        status = response.status_code
        body = _json_or_none(response)

        if status == 409:
            return UploadDuplicate(existing_document_from(body))
        if status in _AUTH_STATUSES:
            return UploadFailure(AUTH_FAILED)
        if response.is_error:
            message = normalize_error_message(body if body is not None else response.text)
            Log.error(f"Upload rejected with {status}: {message}")
            return UploadFailure(message if message != GENERIC_ERROR else UPLOAD_FAILED)

        try:
            body = unwrap_envelope(body)
        except MalformedResponseError as exc:
            return UploadFailure(str(exc))
        record = body.get("document") if isinstance(body, Mapping) else None
        if not isinstance(record, Mapping):
            return UploadFailure("Upload response did not include the stored document")
        return UploadSuccess(normalize(record))


def _json_or_none(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


def _error_detail(body: Any) -> str | None:
    if isinstance(body, Mapping) and body.get("detail"):
        return normalize_error_message(body["detail"])
    return None


def existing_document_from(payload: Any) -> ExistingDocumentInfo | None:
    """Find existing-document details in a 409 body, wherever they are."""
    if not isinstance(payload, Mapping):
        return None
    candidates = [payload]
    if isinstance(payload.get("detail"), Mapping):
        candidates.append(payload["detail"])
    for candidate in candidates:
        info = candidate.get("existing_document") or candidate.get("existingDocument")
        if isinstance(info, Mapping):
            return _existing_info(info)
        if candidate.get("filename"):
            return _existing_info(candidate)
    return None


def _existing_info(data: Mapping[str, Any]) -> ExistingDocumentInfo:
    def text(*keys: str) -> str | None:
        for key in keys:
            value = data.get(key)
            if value is not None and not isinstance(value, (dict, list)):
                return str(value)
        return None

    return ExistingDocumentInfo(
        id=text("id", "document_id"),
        filename=text("filename", "name"),
        created_at=text("created_at"),
        uploaded_by=text("uploaded_by"),
    )
