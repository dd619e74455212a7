import os

# no log file from the module-level app built at import
os.environ["LOG_FILE"] = ""

import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.main import create_app
from app.services.filestore import FileStore
from app.services.locator import StorageLocator
from app.services.metadata import MetadataStore


@pytest.fixture
def settings(tmp_path):
    return Settings(
        STORAGE_ROOT=str(tmp_path / "storage"),
        DEFAULT_FOLDER="uploads",
        CONFINE_FOLDERS=True,
        METADATA_DB=str(tmp_path / "metadata.db"),
        LOG_FILE="",
        CORS_ORIGINS=["*"],
    )


@pytest.fixture
def locator(tmp_path):
    return StorageLocator(tmp_path / "storage", "uploads")


@pytest.fixture
def store(locator):
    return FileStore(locator, chunk_size=4)


@pytest.fixture
def metadata(tmp_path):
    with MetadataStore(tmp_path / "metadata.db") as m:
        yield m


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c
