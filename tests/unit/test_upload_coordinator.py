from collections.abc import Callable
from unittest.mock import AsyncMock, MagicMock, call

import pytest

from docingest.cache.invalidator import CacheInvalidator
from docingest.documents.models import ExistingDocumentInfo
from docingest.documents.normalizer import normalize
from docingest.upload.coordinator import UploadCoordinator
from docingest.upload.exceptions import ConflictStateError
from docingest.upload.models import (
    DuplicateConflict,
    UploadDuplicate,
    UploadFailure,
    UploadFile,
    UploadSuccess,
)
from docingest.upload.session import ConflictState, UploadSession
from docingest.upload.validator import FileValidator


def _file(name: str, size: int = 10) -> UploadFile:
    return UploadFile(name=name, data=b"x" * size, content_type="application/pdf")


def _success(name: str) -> UploadSuccess:
    return UploadSuccess(normalize({"id": name, "name": name}))


def _make_coordinator(
    outcomes: list[object] | None = None,
    on_progress: Callable[[UploadFile, int, int], None] | None = None,
) -> tuple[UploadCoordinator, AsyncMock, MagicMock, MagicMock, UploadSession]:
    api = MagicMock()
    api.upload = AsyncMock(side_effect=outcomes or [])
    cache = MagicMock()
    notifier = MagicMock()
    session = UploadSession()
    validator = FileValidator(
        allowed_extensions=["pdf"],
        allowed_mime_types=[],
        max_file_size_bytes=1000,
    )
    coordinator = UploadCoordinator(
        api=api,
        validator=validator,
        invalidator=CacheInvalidator(cache),
        notifier=notifier,
        session=session,
        organization_id="org-1",
        on_progress=on_progress,
    )
    return coordinator, api.upload, cache, notifier, session


def _attempted(upload: AsyncMock) -> list[str]:
    return [c.args[0].name for c in upload.await_args_list]


class TestEmptyBatch:
    @pytest.mark.asyncio
    async def test_is_noop(self) -> None:
        coordinator, upload, cache, notifier, _ = _make_coordinator()

        result = await coordinator.upload_batch([])

        assert result is None
        upload.assert_not_awaited()
        cache.invalidate.assert_not_called()
        assert notifier.method_calls == []


class TestSuccessfulUploads:
    @pytest.mark.asyncio
    async def test_uploads_in_order_without_force(self) -> None:
        coordinator, upload, _, _, _ = _make_coordinator([_success("a.pdf"), _success("b.pdf")])

        await coordinator.upload_batch([_file("a.pdf"), _file("b.pdf")], folder_id="f-1")

        assert _attempted(upload) == ["a.pdf", "b.pdf"]
        for awaited in upload.await_args_list:
            assert awaited.args[1] == "org-1"
            assert awaited.args[2] == "f-1"
            assert awaited.kwargs["force_override"] is False

    @pytest.mark.asyncio
    async def test_notifies_success_per_file(self) -> None:
        coordinator, _, _, notifier, _ = _make_coordinator([_success("a.pdf")])

        await coordinator.upload_batch([_file("a.pdf")], folder_id="f-1")

        notifier.notify_success.assert_called_once_with("a.pdf uploaded successfully!")

    @pytest.mark.asyncio
    async def test_invalidates_exactly_global_folders_and_view_scope(self) -> None:
        coordinator, _, cache, _, _ = _make_coordinator([_success("a.pdf")])

        await coordinator.upload_batch([_file("a.pdf")], folder_id="F", view_scope_id="F")

        assert cache.invalidate.call_args_list == [
            call(("documents",)),
            call(("folders", "org-1")),
            call(("folders", "org-1", "F", "documents")),
        ]

    @pytest.mark.asyncio
    async def test_no_view_scope_key_without_view_scope(self) -> None:
        coordinator, _, cache, _, _ = _make_coordinator([_success("a.pdf")])

        await coordinator.upload_batch([_file("a.pdf")], folder_id="F")

        assert cache.invalidate.call_count == 2


class TestValidationRejections:
    @pytest.mark.asyncio
    async def test_rejected_files_are_skipped_not_halting(self) -> None:
        coordinator, upload, _, notifier, _ = _make_coordinator([_success("c.pdf")])

        await coordinator.upload_batch(
            [_file("a.txt"), _file("b.pdf", size=0), _file("c.pdf")], folder_id="f-1"
        )

        assert _attempted(upload) == ["c.pdf"]
        assert notifier.notify_error.call_count == 2
        first_error = notifier.notify_error.call_args_list[0].args[0]
        assert "a.txt" in first_error
        assert "Unsupported file type" in first_error


class TestFailures:
    @pytest.mark.asyncio
    async def test_failure_is_reported_and_batch_continues(self) -> None:
        coordinator, upload, cache, notifier, session = _make_coordinator(
            [UploadFailure("Server exploded"), _success("b.pdf")]
        )

        result = await coordinator.upload_batch([_file("a.pdf"), _file("b.pdf")], folder_id="f")

        assert result is None
        assert _attempted(upload) == ["a.pdf", "b.pdf"]
        notifier.notify_error.assert_called_once_with("Failed to upload a.pdf: Server exploded")
        assert cache.invalidate.call_count == 2
        assert session.state is ConflictState.IDLE

    @pytest.mark.asyncio
    async def test_adapter_exception_becomes_failure(self) -> None:
        coordinator, upload, _, notifier, _ = _make_coordinator(
            [RuntimeError("socket gone"), _success("b.pdf")]
        )

        await coordinator.upload_batch([_file("a.pdf"), _file("b.pdf")], folder_id="f")

        assert _attempted(upload) == ["a.pdf", "b.pdf"]
        notifier.notify_error.assert_called_once_with("Failed to upload a.pdf: socket gone")


class TestDuplicateHaltsBatch:
    @pytest.mark.asyncio
    async def test_stops_after_duplicate(self) -> None:
        existing = ExistingDocumentInfo(id="d-1", filename="b.pdf")
        coordinator, upload, _, notifier, session = _make_coordinator(
            [_success("a.pdf"), UploadDuplicate(existing), _success("c.pdf")]
        )
        files = [_file("a.pdf"), _file("b.pdf"), _file("c.pdf")]

        conflict = await coordinator.upload_batch(files, folder_id="f-1", view_scope_id="v-1")

        assert _attempted(upload) == ["a.pdf", "b.pdf"]
        assert conflict == DuplicateConflict(
            file=files[1],
            destination_folder_id="f-1",
            view_folder_id="v-1",
            existing_document=existing,
        )
        assert session.conflict is conflict
        assert session.state is ConflictState.PENDING
        notifier.notify_success.assert_called_once_with("a.pdf uploaded successfully!")
        notifier.notify_error.assert_not_called()

    @pytest.mark.asyncio
    async def test_conflict_without_existing_info_is_still_held(self) -> None:
        coordinator, _, cache, _, session = _make_coordinator([UploadDuplicate(None)])

        conflict = await coordinator.upload_batch([_file("a.pdf")], folder_id="f-1")

        assert conflict is not None
        assert conflict.existing_document is None
        assert session.has_conflict
        cache.invalidate.assert_not_called()

    @pytest.mark.asyncio
    async def test_new_batch_while_conflict_pending_raises(self) -> None:
        coordinator, upload, _, _, _ = _make_coordinator([UploadDuplicate(None)])
        await coordinator.upload_batch([_file("a.pdf")], folder_id="f-1")

        with pytest.raises(ConflictStateError):
            await coordinator.upload_batch([_file("b.pdf")], folder_id="f-1")

        assert upload.await_count == 1


class TestProgress:
    @pytest.mark.asyncio
    async def test_forwards_progress_with_file(self) -> None:
        seen: list[tuple[str, int, int]] = []
        coordinator, upload, _, _, _ = _make_coordinator(
            on_progress=lambda f, loaded, total: seen.append((f.name, loaded, total))
        )

        async def fake_upload(file, org, folder, on_progress=None, force_override=False):  # type: ignore[no-untyped-def]
            on_progress(5, 10)
            on_progress(10, 10)
            return _success(file.name)

        upload.side_effect = fake_upload

        await coordinator.upload_batch([_file("a.pdf")], folder_id="f-1")

        assert seen == [("a.pdf", 5, 10), ("a.pdf", 10, 10)]
