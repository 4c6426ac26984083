from unittest.mock import MagicMock

import pytest

from docingest.upload.models import UploadFile


@pytest.fixture()
def pdf_file() -> UploadFile:
    """A small, valid PDF upload."""
    return UploadFile(name="report.pdf", data=b"%PDF-1.4 test", content_type="application/pdf")


@pytest.fixture()
def notifier() -> MagicMock:
    return MagicMock()


@pytest.fixture()
def query_cache() -> MagicMock:
    return MagicMock()
