from docingest.api.base import BaseDocumentApi
from docingest.cache.invalidator import CacheInvalidator
from docingest.logging.logger import Log
from docingest.notifications.notifier import BaseNotifier
from docingest.upload.models import (
    DuplicateConflict,
    UploadDuplicate,
    UploadFailure,
    UploadOutcome,
    UploadSuccess,
)
from docingest.upload.session import UploadSession

STILL_EXISTS = "File still exists"


class DuplicateConflictResolver:
    """Resolves the session's pending duplicate by force override or cancel."""

    def __init__(
        self,
        *,
        api: BaseDocumentApi,
        invalidator: CacheInvalidator,
        notifier: BaseNotifier,
        session: UploadSession,
        organization_id: str,
    ) -> None:
        self._api = api
        self._invalidator = invalidator
        self._notifier = notifier
        self._session = session
        self._organization_id = organization_id

    @property
    def pending(self) -> DuplicateConflict | None:
        return self._session.conflict

    async def force_override(self) -> UploadOutcome:
        """Re-upload the held file with replace semantics.

        The conflict is cleared whatever the outcome.

        Raises:
            ConflictStateError: if no conflict is pending, or one is already
                being resolved.
        """
        conflict = self._session.begin_resolving()
        file = conflict.file
        Log.info(f"Force uploading {file.name} to replace the existing document")
        try:
            outcome = await self._api.upload(
                file,
                self._organization_id,
                conflict.destination_folder_id,
                force_override=True,
            )
        except Exception as exc:
            Log.exception(f"Document API raised during force upload of {file.name}")
            outcome = UploadFailure(str(exc) or type(exc).__name__)
        finally:
            self._session.clear()

        if isinstance(outcome, UploadSuccess):
            self._notifier.notify_success(f"{file.name} replaced successfully!")
            self._invalidator.after_upload(self._organization_id, conflict.view_folder_id)
        else:
            reason = STILL_EXISTS if isinstance(outcome, UploadDuplicate) else outcome.reason
            Log.error(f"Force upload of {file.name} failed: {reason}")
            self._notifier.notify_error(f"Failed to replace {file.name}: {reason}")
        return outcome

    def cancel(self) -> None:
        """Drop the pending conflict without contacting the backend.

        Raises:
            ConflictStateError: if no conflict is pending.
        """
        conflict = self._session.begin_resolving()
        self._session.clear()
        Log.info(f"Duplicate conflict for {conflict.file.name} cancelled")
