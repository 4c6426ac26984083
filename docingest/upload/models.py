import mimetypes
from dataclasses import dataclass, field
from pathlib import Path

from docingest.documents.models import Document, ExistingDocumentInfo


@dataclass(frozen=True)
class UploadFile:
    """A candidate file as handed over by the caller."""

    name: str
    data: bytes = field(repr=False)
    content_type: str = ""

    @property
    def size_bytes(self) -> int:
        return len(self.data)

    @property
    def extension(self) -> str:
        """Lower-cased extension without the leading dot, or ''."""
        suffix = Path(self.name).suffix
        return suffix[1:].lower() if suffix else ""

    @classmethod
    def from_path(cls, path: Path, content_type: str | None = None) -> "UploadFile":
        if content_type is None:
            content_type = mimetypes.guess_type(path.name)[0] or ""
        return cls(name=path.name, data=path.read_bytes(), content_type=content_type)


@dataclass(frozen=True)
class UploadSuccess:
    document: Document

    success = True
    is_duplicate = False


@dataclass(frozen=True)
class UploadDuplicate:
    existing_document: ExistingDocumentInfo | None = None

    success = False
    is_duplicate = True


@dataclass(frozen=True)
class UploadFailure:
    reason: str

    success = False
    is_duplicate = False


UploadOutcome = UploadSuccess | UploadDuplicate | UploadFailure


@dataclass(frozen=True)
class DuplicateConflict:
    """A suspended upload waiting for an override-or-cancel decision."""

    file: UploadFile
    destination_folder_id: str | None
    view_folder_id: str | None
    existing_document: ExistingDocumentInfo | None = None
