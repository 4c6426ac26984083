"""Maps raw backend document records onto the canonical Document.

Different backend code paths name the same field differently. This module is
the only place that knows about the alternate keys; it never raises, and falls
back to defaults for anything missing.
"""

import uuid
from collections.abc import Iterable, Mapping
from datetime import datetime, timezone
from typing import Any

from docingest.documents.models import DOCUMENT_STATUSES, Document, path_folder_segment

UNKNOWN_FILE = "Unknown File"
UNKNOWN_TYPE = "unknown"
UNKNOWN_FOLDER = "Unknown Folder"
DEFAULT_STATUS = "uploaded"

_NAME_KEYS = ("name", "filename", "file_name")
_NAME_PATH_KEYS = ("path", "gcs_path", "storage_path")
_TYPE_KEYS = ("type", "file_type", "content_type")
_SIZE_KEYS = ("size", "file_size", "filesize", "content_length", "size_bytes")
_TIMESTAMP_KEYS = ("uploaded_at", "created_at")
_FOLDER_PATH_KEYS = ("storage_path", "gcs_path", "path")
_ID_KEYS = ("id", "document_id")
_ORG_KEYS = ("organization_id", "org_id")

_CONSUMED_KEYS = frozenset(
    {
        *_NAME_KEYS,
        *_TYPE_KEYS,
        *_SIZE_KEYS,
        *_TIMESTAMP_KEYS,
        *_FOLDER_PATH_KEYS,
        *_ID_KEYS,
        *_ORG_KEYS,
        "status",
        "folder_id",
        "folder_name",
        "uploaded_at_inferred",
    }
)


def normalize(raw: Mapping[str, Any]) -> Document:
    """Build a canonical Document from any known record shape."""
    name = _resolve_name(raw)
    uploaded_at, inferred = _resolve_uploaded_at(raw)
    return Document(
        id=_first_str(raw, _ID_KEYS) or f"temp-{uuid.uuid4().hex}",
        name=name or UNKNOWN_FILE,
        mime_type=_resolve_mime_type(raw, name),
        size_bytes=_resolve_size(raw),
        status=_resolve_status(raw),
        uploaded_at=uploaded_at,
        organization_id=_first_str(raw, _ORG_KEYS) or "",
        folder_id=_first_str(raw, ("folder_id",)),
        folder_name=_resolve_folder_name(raw),
        storage_path=_first_str(raw, _FOLDER_PATH_KEYS),
        uploaded_at_inferred=inferred,
        extra={k: v for k, v in raw.items() if k not in _CONSUMED_KEYS},
    )


def normalize_many(records: Iterable[Mapping[str, Any]]) -> list[Document]:
    return [normalize(record) for record in records]


def _first_str(raw: Mapping[str, Any], keys: Iterable[str]) -> str | None:
    for key in keys:
        value = raw.get(key)
        if value is None or isinstance(value, (dict, list)):
            continue
        text = str(value).strip()
        if text:
            return text
    return None


def _resolve_name(raw: Mapping[str, Any]) -> str | None:
    name = _first_str(raw, _NAME_KEYS)
    if name:
        return name
    for key in _NAME_PATH_KEYS:
        path = _first_str(raw, (key,))
        if path:
            last = path.rstrip("/").split("/")[-1]
            if last:
                return last
    return None


def _resolve_mime_type(raw: Mapping[str, Any], name: str | None) -> str:
    declared = _first_str(raw, _TYPE_KEYS)
    if declared:
        return declared
    if name and "." in name:
        extension = name.rsplit(".", 1)[-1].lower()
        if extension:
            return extension
    return UNKNOWN_TYPE


def _resolve_size(raw: Mapping[str, Any]) -> int:
    for key in _SIZE_KEYS:
        value = raw.get(key)
        if value is None or isinstance(value, bool):
            continue
        try:
            size = int(value)
        except (TypeError, ValueError):
            continue
        if size > 0:
            return size
    return 0


def _resolve_status(raw: Mapping[str, Any]) -> str:
    status = _first_str(raw, ("status",))
    if status and status.lower() in DOCUMENT_STATUSES:
        return status.lower()
    return DEFAULT_STATUS


def _resolve_uploaded_at(raw: Mapping[str, Any]) -> tuple[str, bool]:
    # A fabricated "now" is flagged so callers can tell it from a real timestamp.
    timestamp = _first_str(raw, _TIMESTAMP_KEYS)
    if timestamp:
        return timestamp, raw.get("uploaded_at_inferred") is True
    return datetime.now(timezone.utc).isoformat(), True


def _resolve_folder_name(raw: Mapping[str, Any]) -> str:
    explicit = _first_str(raw, ("folder_name",))
    if explicit:
        return explicit
    segment = path_folder_segment(_first_str(raw, _FOLDER_PATH_KEYS))
    return segment or UNKNOWN_FOLDER
