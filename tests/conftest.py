"""Shared test fixtures for the web share test suite."""

import pytest
from fastapi.testclient import TestClient

from webshare.core.config import Settings
from webshare.main import create_app
from webshare.services.filestore import FileStore
from webshare.services.registry import ShareRegistry


# ============================================================================
# Storage Fixtures
# ============================================================================

@pytest.fixture
def upload_dir(tmp_path):
    """Empty uploads directory for one test."""
    path = tmp_path / "uploads"
    path.mkdir()
    return path


@pytest.fixture
def file_store(upload_dir):
    return FileStore(upload_dir)


@pytest.fixture
def registry():
    """Fresh registry, independent of every other test."""
    return ShareRegistry()


# ============================================================================
# Application Fixtures
# ============================================================================

@pytest.fixture
def settings(upload_dir):
    return Settings(UPLOAD_DIR=str(upload_dir), LOG_DIR="")


@pytest.fixture
def app(settings, registry):
    return create_app(settings, registry=registry)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def upload(client):
    """POST one file to /upload."""
    def _upload(content: bytes, filename: str = "test.txt"):
        return client.post("/upload", files={"file": (filename, content, "text/plain")})
    return _upload
