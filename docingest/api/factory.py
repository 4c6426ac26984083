from docingest.api.base import BaseDocumentApi
from docingest.api.httpx_adapter import HttpxDocumentApi
from docingest.api.memory_adapter import InMemoryDocumentApi
from docingest.config.settings import Settings


class DocumentApiFactory:
    """Creates the document API adapter selected in settings."""

    ENGINES: tuple[str, ...] = ("http", "memory")

    @classmethod
    def create(cls, settings: Settings) -> BaseDocumentApi:
        engine = settings.document_api_engine.lower()
        if engine == "http":
            return HttpxDocumentApi(
                base_url=settings.api_base_url,
                organization_name=settings.organization_name,
                timeout_seconds=settings.api_timeout_seconds,
                api_token=settings.api_token,
            )
        if engine == "memory":
            return InMemoryDocumentApi(organization_name=settings.organization_name)
        raise ValueError(
            f"Unknown document API engine '{engine}'. Choose from: {list(cls.ENGINES)}"
        )
