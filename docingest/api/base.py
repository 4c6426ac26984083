from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from typing import Any

from docingest.deletion.models import DeleteOutcome
from docingest.documents.models import DocumentPage
from docingest.upload.models import UploadFile, UploadOutcome

ProgressCallback = Callable[[int, int], None]


class BaseDocumentApi(ABC):
    """Contract for all document backend adapters."""

    @abstractmethod
    async def upload(
        self,
        file: UploadFile,
        organization_id: str,
        folder_id: str | None = None,
        on_progress: ProgressCallback | None = None,
        force_override: bool = False,
    ) -> UploadOutcome:
        """Upload one file into a folder.

        Args:
            file: The file to send.
            organization_id: Owning organization.
            folder_id: Destination folder; required by the backend.
            on_progress: Called with (bytes_loaded, bytes_total) during transfer.
            force_override: Replace an existing document with the same name.

        Returns:
            UploadSuccess, UploadDuplicate, or UploadFailure. Never raises.
        """

    @abstractmethod
    async def list_documents(
        self,
        organization_id: str,
        filters: Mapping[str, Any] | None = None,
    ) -> DocumentPage:
        """List raw document records.

        Raises:
            DocumentApiError: on transport, status, or response-shape failure.
        """

    @abstractmethod
    async def delete(self, document_id: str) -> DeleteOutcome:
        """Delete one document by id.

        Returns:
            DeleteSuccess or DeleteFailure with a user-facing reason. Never raises.
        """

    async def aclose(self) -> None:
        """Release any held connections."""
