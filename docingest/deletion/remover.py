from docingest.api.base import BaseDocumentApi
from docingest.cache.invalidator import CacheInvalidator
from docingest.deletion.models import DeleteFailure, DeleteOutcome, DeleteSuccess
from docingest.documents.models import Document
from docingest.logging.logger import Log
from docingest.notifications.notifier import BaseNotifier

INVALID_DOCUMENT = "Cannot delete: Invalid document"


class DocumentRemover:
    """Deletes one document and invalidates the listings that showed it."""

    def __init__(
        self,
        *,
        api: BaseDocumentApi,
        invalidator: CacheInvalidator,
        notifier: BaseNotifier,
        organization_id: str,
    ) -> None:
        self._api = api
        self._invalidator = invalidator
        self._notifier = notifier
        self._organization_id = organization_id

    async def delete(self, document: Document) -> DeleteOutcome:
        """Delete ``document``; the outcome is also reported to the notifier."""
        if not document.id:
            self._notifier.notify_error(INVALID_DOCUMENT)
            return DeleteFailure(INVALID_DOCUMENT)

        Log.info(f"Deleting {document.name} ({document.id})")
        try:
            outcome = await self._api.delete(document.id)
        except Exception as exc:
            Log.exception(f"Document API raised during delete of {document.id}")
            outcome = DeleteFailure(str(exc) or type(exc).__name__)

        if isinstance(outcome, DeleteSuccess):
            self._notifier.notify_success(f'Document "{document.name}" deleted successfully')
            self._invalidator.after_delete(self._organization_id, document.folder_id)
        else:
            Log.error(f"Delete of {document.id} failed: {outcome.reason}")
            self._notifier.notify_error(outcome.reason)
        return outcome
