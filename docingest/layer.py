from dataclasses import dataclass

from docingest.api.base import BaseDocumentApi
from docingest.api.factory import DocumentApiFactory
from docingest.cache.invalidator import BaseQueryCache, CacheInvalidator
from docingest.cache.memory_cache import InMemoryQueryCache
from docingest.config.settings import Settings
from docingest.deletion.remover import DocumentRemover
from docingest.listing.document_lister import DocumentLister
from docingest.listing.folder_resolver import FolderDocumentsResolver
from docingest.notifications.notifier import BaseNotifier, LogNotifier
from docingest.upload.conflict import DuplicateConflictResolver
from docingest.upload.coordinator import FileProgressCallback, UploadCoordinator
from docingest.upload.session import UploadSession
from docingest.upload.validator import FileValidator


@dataclass
class IngestionLayer:
    """Everything one caller needs, sharing one session and one API client."""

    api: BaseDocumentApi
    session: UploadSession
    validator: FileValidator
    invalidator: CacheInvalidator
    coordinator: UploadCoordinator
    conflicts: DuplicateConflictResolver
    remover: DocumentRemover
    folders: FolderDocumentsResolver
    documents: DocumentLister

    async def aclose(self) -> None:
        await self.api.aclose()


def build_ingestion_layer(
    settings: Settings,
    *,
    api: BaseDocumentApi | None = None,
    cache: BaseQueryCache | None = None,
    notifier: BaseNotifier | None = None,
    on_progress: FileProgressCallback | None = None,
) -> IngestionLayer:
    """Wire settings, adapters, cache, and notifier into one layer."""
    api = api if api is not None else DocumentApiFactory.create(settings)
    cache = cache if cache is not None else InMemoryQueryCache()
    notifier = notifier if notifier is not None else LogNotifier()
    session = UploadSession()
    validator = FileValidator.from_settings(settings)
    invalidator = CacheInvalidator(cache)
    return IngestionLayer(
        api=api,
        session=session,
        validator=validator,
        invalidator=invalidator,
        coordinator=UploadCoordinator(
            api=api,
            validator=validator,
            invalidator=invalidator,
            notifier=notifier,
            session=session,
            organization_id=settings.organization_id,
            on_progress=on_progress,
        ),
        conflicts=DuplicateConflictResolver(
            api=api,
            invalidator=invalidator,
            notifier=notifier,
            session=session,
            organization_id=settings.organization_id,
        ),
        remover=DocumentRemover(
            api=api,
            invalidator=invalidator,
            notifier=notifier,
            organization_id=settings.organization_id,
        ),
        folders=FolderDocumentsResolver(api=api, organization_name=settings.organization_name),
        documents=DocumentLister(api=api),
    )
