from unittest.mock import MagicMock

import pytest

from docingest.api.memory_adapter import InMemoryDocumentApi
from docingest.cache.memory_cache import InMemoryQueryCache
from docingest.config.settings import Settings
from docingest.layer import IngestionLayer, build_ingestion_layer


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        document_api_engine="memory",
        organization_id="org-1",
        organization_name="Acme",
        max_file_size_bytes=1024,
    )


@pytest.fixture
def backend() -> InMemoryDocumentApi:
    return InMemoryDocumentApi(
        organization_name="Acme",
        folders={"f-inv": "Invoices", "f-rec": "Receipts"},
    )


@pytest.fixture
def cache() -> InMemoryQueryCache:
    return InMemoryQueryCache()


@pytest.fixture
def layer(
    test_settings: Settings,
    backend: InMemoryDocumentApi,
    cache: InMemoryQueryCache,
    notifier: MagicMock,
) -> IngestionLayer:
    """The full layer over the in-memory backend, which holds no connections."""
    return build_ingestion_layer(test_settings, api=backend, cache=cache, notifier=notifier)
