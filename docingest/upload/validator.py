"""Local checks run on every candidate file before any network call."""

from collections.abc import Iterable
from dataclasses import dataclass, field

from docingest.config.settings import Settings
from docingest.upload.models import UploadFile

_MB = 1024 * 1024
ALLOWED_KINDS_LABEL = "PDF, Excel, Images"


@dataclass(frozen=True)
class ValidationResult:
    ok: bool
    reason: str | None = None

    @classmethod
    def accepted(cls) -> "ValidationResult":
        return cls(ok=True)

    @classmethod
    def rejected(cls, reason: str) -> "ValidationResult":
        return cls(ok=False, reason=reason)


@dataclass(frozen=True)
class RejectedFile:
    file: UploadFile
    reason: str


@dataclass
class BatchValidation:
    valid: list[UploadFile] = field(default_factory=list)
    invalid: list[RejectedFile] = field(default_factory=list)


class FileValidator:
    """Checks extension/MIME type and size against configured limits."""

    def __init__(
        self,
        *,
        allowed_extensions: Iterable[str],
        allowed_mime_types: Iterable[str],
        max_file_size_bytes: int,
    ) -> None:
        self._extensions = frozenset(ext.lower().lstrip(".") for ext in allowed_extensions)
        self._mime_types = frozenset(mime.lower() for mime in allowed_mime_types)
        self._max_file_size_bytes = max_file_size_bytes

    @classmethod
    def from_settings(cls, settings: Settings) -> "FileValidator":
        return cls(
            allowed_extensions=settings.allowed_extensions,
            allowed_mime_types=settings.allowed_mime_types,
            max_file_size_bytes=settings.max_file_size_bytes,
        )

    def validate(self, file: UploadFile) -> ValidationResult:
        if not self._is_allowed_type(file):
            extension = file.extension or "unknown"
            return ValidationResult.rejected(
                f"Unsupported file type (.{extension}). Allowed: {ALLOWED_KINDS_LABEL}"
            )
        if file.size_bytes > self._max_file_size_bytes:
            return ValidationResult.rejected(
                f"File too large ({file.size_bytes / _MB:.1f}MB > "
                f"{self._max_file_size_bytes / _MB:g}MB)"
            )
        if file.size_bytes == 0:
            return ValidationResult.rejected("File is empty")
        return ValidationResult.accepted()

    def validate_batch(self, files: Iterable[UploadFile]) -> BatchValidation:
        """Partition files into valid and invalid; every file is checked."""
        batch = BatchValidation()
        for file in files:
            result = self.validate(file)
            if result.ok:
                batch.valid.append(file)
            else:
                batch.invalid.append(RejectedFile(file=file, reason=result.reason or ""))
        return batch

    def _is_allowed_type(self, file: UploadFile) -> bool:
        # Union, not intersection: either check passing accepts the file.
        if file.extension in self._extensions:
            return True
        return file.content_type.lower() in self._mime_types
