class IngestionError(Exception):
    """Base exception for ingestion-layer contract violations."""


class ConflictStateError(IngestionError):
    """Raised when a conflict operation is called in the wrong session state."""
