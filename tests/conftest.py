# FILE: tests/conftest.py

import os
import sys
import tempfile
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# Keep import-time settings (backend.app builds an app on import) out of the repo
_import_root = tempfile.mkdtemp(prefix="memory-lane-tests-")
os.environ.setdefault("DATA_DIR", os.path.join(_import_root, "data"))
os.environ.setdefault("LOGS_DIR", os.path.join(_import_root, "logs"))
os.environ.setdefault("FRONTEND_DIR", os.path.join(_import_root, "frontend"))

import pytest
from fastapi.testclient import TestClient

from backend.config import reload_settings
from backend.services.record_store import RecordStore

PASSWORD = "opensesame"


@pytest.fixture
def settings(tmp_path, monkeypatch):
    """Settings pointing at a fresh data directory"""
    monkeypatch.setenv("DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("LOGS_DIR", str(tmp_path / "logs"))
    monkeypatch.setenv("FRONTEND_DIR", str(tmp_path / "frontend"))
    monkeypatch.setenv("RATE_LIMIT_ENABLED", "false")
    monkeypatch.delenv("UPLOAD_DIR", raising=False)
    monkeypatch.delenv("MEMORIES_PASSWORD", raising=False)
    return reload_settings()


@pytest.fixture
def record_store(settings):
    return RecordStore(settings.data_dir)


@pytest.fixture
def password(record_store):
    """Configure the shared password and return it"""
    record_store.write("password", {"password": PASSWORD})
    return PASSWORD


@pytest.fixture
def client(settings):
    from backend.app import create_app
    return TestClient(create_app())


@pytest.fixture
def auth_headers(client, password):
    """Authorization header for a freshly issued session"""
    response = client.post("/check-password", json={"password": password})
    token = response.json()["token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def sample_memory():
    return {
        "name": "Sam",
        "caption": "Beach day",
        "details": "Sunset at the pier",
        "imageUrl": "https://example.com/beach.jpg"
    }
