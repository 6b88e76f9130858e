"""Shared fixtures: an app per test with an in-memory people repository."""
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Ensure the project root is importable without setting PYTHONPATH
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.config import Config
from app.database.dependencies import get_people_repository
from app.main import create_app
from tests.helpers import FakePeopleRepository


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch, tmp_path):
    """Test environment: fake store URL, temporary upload root"""
    monkeypatch.setenv("MONGO_CONNECTION", "mongodb://localhost:27017/people_test")
    monkeypatch.setenv("COOKIE_SECRET", "test-cookie-secret")
    monkeypatch.setenv("APP_ENV", "development")
    monkeypatch.setenv("UPLOAD_DIR", str(tmp_path / "uploads"))


@pytest.fixture
def repo():
    return FakePeopleRepository()


@pytest.fixture
def app(repo):
    application = create_app(Config())
    application.dependency_overrides[get_people_repository] = lambda: repo
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app):
    # No lifespan: the store is never contacted
    return TestClient(app)


@pytest.fixture
def upload_dir(app) -> Path:
    return app.state.context.config.UPLOAD_DIR
