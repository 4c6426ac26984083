from dataclasses import replace
from unittest.mock import AsyncMock, MagicMock, call

import pytest

from docingest.cache.invalidator import CacheInvalidator
from docingest.deletion.models import DeleteFailure, DeleteSuccess
from docingest.deletion.remover import INVALID_DOCUMENT, DocumentRemover
from docingest.documents.normalizer import normalize


def _make_remover(outcome: object = None) -> tuple[DocumentRemover, AsyncMock, MagicMock, MagicMock]:
    api = MagicMock()
    api.delete = AsyncMock(side_effect=[outcome] if outcome is not None else [])
    cache = MagicMock()
    notifier = MagicMock()
    remover = DocumentRemover(
        api=api,
        invalidator=CacheInvalidator(cache),
        notifier=notifier,
        organization_id="org-1",
    )
    return remover, api.delete, cache, notifier


class TestDeleteSuccess:
    @pytest.mark.asyncio
    async def test_invalidates_listing_and_document_folder(self) -> None:
        remover, delete, cache, notifier = _make_remover(DeleteSuccess("d-1"))
        document = normalize({"id": "d-1", "name": "a.pdf", "folder_id": "f-inv"})

        outcome = await remover.delete(document)

        assert outcome == DeleteSuccess("d-1")
        delete.assert_awaited_once_with("d-1")
        notifier.notify_success.assert_called_once_with('Document "a.pdf" deleted successfully')
        assert cache.invalidate.call_args_list == [
            call(("documents",)),
            call(("folders", "org-1", "f-inv", "documents")),
        ]

    @pytest.mark.asyncio
    async def test_document_without_folder_only_invalidates_listing(self) -> None:
        remover, _, cache, _ = _make_remover(DeleteSuccess("d-1"))

        await remover.delete(normalize({"id": "d-1", "name": "a.pdf"}))

        assert cache.invalidate.call_args_list == [call(("documents",))]


class TestDeleteFailure:
    @pytest.mark.asyncio
    async def test_failure_is_notified_without_invalidation(self) -> None:
        reason = "Document not found. It may have already been deleted."
        remover, _, cache, notifier = _make_remover(DeleteFailure(reason))

        outcome = await remover.delete(normalize({"id": "d-1", "name": "a.pdf"}))

        assert outcome == DeleteFailure(reason)
        notifier.notify_error.assert_called_once_with(reason)
        notifier.notify_success.assert_not_called()
        cache.invalidate.assert_not_called()

    @pytest.mark.asyncio
    async def test_adapter_exception_becomes_failure(self) -> None:
        remover, delete, cache, notifier = _make_remover()
        delete.side_effect = RuntimeError("socket gone")

        outcome = await remover.delete(normalize({"id": "d-1", "name": "a.pdf"}))

        assert outcome == DeleteFailure("socket gone")
        notifier.notify_error.assert_called_once_with("socket gone")
        cache.invalidate.assert_not_called()

    @pytest.mark.asyncio
    async def test_document_without_id_is_rejected_locally(self) -> None:
        remover, delete, _, notifier = _make_remover()
        document = replace(normalize({"name": "a.pdf"}), id="")

        outcome = await remover.delete(document)

        assert outcome == DeleteFailure(INVALID_DOCUMENT)
        delete.assert_not_awaited()
        notifier.notify_error.assert_called_once_with(INVALID_DOCUMENT)
