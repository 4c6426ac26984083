from docingest.documents.models import Document

_FAILED_STATUSES = frozenset({"error", "failed"})
_PARSED_MARKERS = ("parsed_content", "parsed_content_path", "parsed_at")


def is_parsed(document: Document) -> bool:
    """True when the document has been parsed or carries parsed content."""
    if document.status == "parsed":
        return True
    return any(document.extra.get(marker) for marker in _PARSED_MARKERS)


def is_ready(document: Document) -> bool:
    """Viewable/downloadable: anything not in an error state."""
    return document.status in ("uploaded", "processing", "processed") or is_parsed(document)


def can_perform_ai_operations(document: Document) -> bool:
    return document.status == "parsed"


def parse_status_message(document: Document) -> str | None:
    """Why AI features are unavailable for ``document``, or None if they are."""
    if can_perform_ai_operations(document):
        return None
    if document.status in _FAILED_STATUSES:
        return "Document has errors and cannot be processed. Please re-upload the document."
    if document.status == "processing":
        return "Document is currently being processed. Please wait for processing to complete."
    return "Document is ready. Click the parse button to extract content for AI features."
