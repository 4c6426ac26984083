from collections.abc import Callable, Sequence

from docingest.api.base import BaseDocumentApi, ProgressCallback
from docingest.cache.invalidator import CacheInvalidator
from docingest.logging.logger import Log
from docingest.notifications.notifier import BaseNotifier
from docingest.upload.exceptions import ConflictStateError
from docingest.upload.models import (
    DuplicateConflict,
    UploadDuplicate,
    UploadFailure,
    UploadFile,
    UploadOutcome,
    UploadSuccess,
)
from docingest.upload.session import UploadSession
from docingest.upload.validator import FileValidator

FileProgressCallback = Callable[[UploadFile, int, int], None]


class UploadCoordinator:
    """Drives validate -> upload -> classify for a batch, one file at a time.

    Validation rejections and upload failures are reported and skipped. A
    duplicate parks the file on the session and stops the batch; the files
    after it are not attempted.
    """

    def __init__(
        self,
        *,
        api: BaseDocumentApi,
        validator: FileValidator,
        invalidator: CacheInvalidator,
        notifier: BaseNotifier,
        session: UploadSession,
        organization_id: str,
        on_progress: FileProgressCallback | None = None,
    ) -> None:
        self._api = api
        self._validator = validator
        self._invalidator = invalidator
        self._notifier = notifier
        self._session = session
        self._organization_id = organization_id
        self._on_progress = on_progress

    async def upload_batch(
        self,
        files: Sequence[UploadFile],
        folder_id: str | None = None,
        view_scope_id: str | None = None,
    ) -> DuplicateConflict | None:
        """Upload files in order.

        Returns:
            The conflict that halted the batch, or None if every file was tried.

        Raises:
            ConflictStateError: if the session already holds a conflict.
        """
        if not files:
            Log.warning("No files provided for upload")
            return None
        if self._session.has_conflict:
            raise ConflictStateError(
                "Resolve the pending duplicate conflict before starting a new batch"
            )

        Log.info(f"Starting upload of {len(files)} file(s) into folder {folder_id or 'root'}")
        for index, file in enumerate(files):
            validation = self._validator.validate(file)
            if not validation.ok:
                Log.warning(f"Rejected {file.name}: {validation.reason}")
                self._notifier.notify_error(f"{file.name}: {validation.reason}")
                continue

            Log.info(
                f"Uploading {file.name} ({file.size_bytes} bytes, "
                f"{file.content_type or 'unknown'}) to folder {folder_id or 'root'}"
            )
            outcome = await self._attempt(file, folder_id)

            if isinstance(outcome, UploadSuccess):
                self._notifier.notify_success(f"{file.name} uploaded successfully!")
                self._invalidator.after_upload(self._organization_id, view_scope_id)
            elif isinstance(outcome, UploadDuplicate):
                conflict = DuplicateConflict(
                    file=file,
                    destination_folder_id=folder_id,
                    view_folder_id=view_scope_id,
                    existing_document=outcome.existing_document,
                )
                self._session.hold(conflict)
                skipped = len(files) - index - 1
                Log.info(f"Batch halted on duplicate {file.name}; {skipped} file(s) not attempted")
                return conflict
            else:
                Log.error(f"Upload of {file.name} failed: {outcome.reason}")
                self._notifier.notify_error(f"Failed to upload {file.name}: {outcome.reason}")

        Log.info("Upload batch finished")
        return None

    async def _attempt(self, file: UploadFile, folder_id: str | None) -> UploadOutcome:
        try:
            return await self._api.upload(
                file,
                self._organization_id,
                folder_id,
                on_progress=self._progress_for(file),
                force_override=False,
            )
        except Exception as exc:
            Log.exception(f"Document API raised during upload of {file.name}")
            return UploadFailure(str(exc) or type(exc).__name__)

    def _progress_for(self, file: UploadFile) -> ProgressCallback | None:
        if self._on_progress is None:
            return None
        callback = self._on_progress
        return lambda loaded, total: callback(file, loaded, total)
