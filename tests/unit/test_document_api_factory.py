import pytest

from docingest.api.factory import DocumentApiFactory
from docingest.api.httpx_adapter import HttpxDocumentApi
from docingest.api.memory_adapter import InMemoryDocumentApi
from docingest.config.settings import Settings


class TestDocumentApiFactory:
    def test_http_engine(self) -> None:
        settings = Settings(document_api_engine="http", organization_name="Acme")
        assert isinstance(DocumentApiFactory.create(settings), HttpxDocumentApi)

    def test_memory_engine_is_case_insensitive(self) -> None:
        settings = Settings(document_api_engine="MEMORY", organization_name="Acme")
        assert isinstance(DocumentApiFactory.create(settings), InMemoryDocumentApi)

    def test_unknown_engine_raises(self) -> None:
        settings = Settings(document_api_engine="ftp")
        with pytest.raises(ValueError, match="Unknown document API engine 'ftp'"):
            DocumentApiFactory.create(settings)
