import math
from collections.abc import Mapping
from typing import Any

from docingest.api.exceptions import MalformedResponseError
from docingest.documents.models import DocumentPage

_DEFAULT_PER_PAGE = 20


def unwrap_envelope(payload: Any) -> Any:
    """Strip a ``{"success": ..., "data": ...}`` envelope if there is one."""
    if isinstance(payload, Mapping) and "success" in payload and "data" in payload:
        if payload.get("success") is False:
            raise MalformedResponseError(
                f"Backend reported failure: {payload.get('error') or payload.get('message')}"
            )
        return payload["data"]
    return payload


def parse_document_page(payload: Any) -> DocumentPage:
    """Accept every listing shape the backend is known to return.

    Raises:
        MalformedResponseError: if no document list can be found.
    """
    body = unwrap_envelope(payload)
    if isinstance(body, list):
        records = body
        body = {}
    elif isinstance(body, Mapping):
        records = body.get("documents")
        if records is None:
            records = body.get("items")
    else:
        records = None

    if not isinstance(records, list):
        raise MalformedResponseError("Listing response carries no document list")

    documents = [dict(r) for r in records if isinstance(r, Mapping)]
    total = _as_int(body.get("total"), None)
    if total is None:
        total = _as_int(body.get("count"), len(documents))
    per_page = _as_int(body.get("per_page"), _DEFAULT_PER_PAGE) or _DEFAULT_PER_PAGE
    total_pages = _as_int(body.get("total_pages"), None)
    if total_pages is None:
        total_pages = math.ceil(total / per_page)
    return DocumentPage(
        documents=documents,
        total=total,
        page=_as_int(body.get("page"), 1) or 1,
        per_page=per_page,
        total_pages=total_pages,
    )


def _as_int(value: Any, default: int | None) -> int | None:
    if value is None or isinstance(value, bool):
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default
