import math
from dataclasses import dataclass, field
from typing import Any

DOCUMENT_STATUSES = frozenset(
    {"uploaded", "processing", "processed", "parsed", "error", "failed"}
)


@dataclass(frozen=True)
class Document:
    """Canonical document shape used everywhere outside the normalizer."""

    id: str
    name: str
    mime_type: str
    size_bytes: int
    status: str
    uploaded_at: str
    organization_id: str
    folder_id: str | None = None
    folder_name: str | None = None
    storage_path: str | None = None
    uploaded_at_inferred: bool = False
    extra: dict[str, Any] = field(default_factory=dict, hash=False)

    def to_dict(self) -> dict[str, Any]:
        """Render under backend key names, suitable for re-normalization."""
        data: dict[str, Any] = dict(self.extra)
        data.update(
            {
                "id": self.id,
                "name": self.name,
                "type": self.mime_type,
                "size": self.size_bytes,
                "status": self.status,
                "uploaded_at": self.uploaded_at,
                "organization_id": self.organization_id,
                "folder_name": self.folder_name,
            }
        )
        if self.folder_id is not None:
            data["folder_id"] = self.folder_id
        if self.storage_path is not None:
            data["storage_path"] = self.storage_path
        if self.uploaded_at_inferred:
            data["uploaded_at_inferred"] = True
        return data


@dataclass(frozen=True)
class ExistingDocumentInfo:
    """What the backend tells us about the document a duplicate collided with."""

    id: str | None = None
    filename: str | None = None
    created_at: str | None = None
    uploaded_by: str | None = None


@dataclass(frozen=True)
class FolderScope:
    """The (folder_id, folder_name) pair a folder listing must stay within."""

    folder_id: str | None
    folder_name: str

    def contains(self, document: Document) -> bool:
        if self.folder_id and document.folder_id == self.folder_id:
            return True
        wanted = self.folder_name.casefold()
        if document.folder_name and document.folder_name.casefold() == wanted:
            return True
        segment = path_folder_segment(document.storage_path)
        return segment is not None and segment.casefold() == wanted


def path_folder_segment(path: str | None) -> str | None:
    """Folder segment of an ``org/original/folder/file`` style path."""
    if not path:
        return None
    parts = path.split("/")
    if len(parts) < 3:
        return None
    return parts[-2] or None


@dataclass
class DocumentPage:
    """One unwrapped listing response, records still raw."""

    documents: list[dict[str, Any]]
    total: int
    page: int = 1
    per_page: int = 20
    total_pages: int = 1


@dataclass
class DocumentList:
    """Normalized listing handed to callers."""

    documents: list[Document] = field(default_factory=list)
    total: int = 0
    page: int = 1
    per_page: int = 20
    total_pages: int = 0

    @classmethod
    def empty(cls) -> "DocumentList":
        return cls()

    @classmethod
    def of(cls, documents: list[Document], page: int = 1, per_page: int = 20) -> "DocumentList":
        """Build a list whose totals are derived from ``documents`` alone."""
        total = len(documents)
        per_page = per_page if per_page > 0 else 20
        return cls(
            documents=documents,
            total=total,
            page=page,
            per_page=per_page,
            total_pages=math.ceil(total / per_page),
        )
