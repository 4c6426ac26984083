class DocumentApiError(Exception):
    """Base exception for all document API errors."""


class DocumentApiNetworkError(DocumentApiError):
    """Raised when the backend cannot be reached or the request times out."""


class DocumentApiStatusError(DocumentApiError):
    """Raised when the backend answers with an error status."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


class DocumentApiAuthError(DocumentApiStatusError):
    """Raised on 401/403 responses."""


class MalformedResponseError(DocumentApiError):
    """Raised when a response body does not have a recognizable shape."""
