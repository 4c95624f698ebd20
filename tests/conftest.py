"""Shared test fixtures for the PetroHR test suite.

Every test runs against a fresh in-memory SQLite database. Redis and the
object store are replaced by in-memory fakes through FastAPI dependency
overrides, so no external service is needed.
"""

import os

# Force auth off and use an in-memory database before any app imports.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["AUTH_ENABLED"] = "false"
os.environ["LOG_FORMAT"] = "text"

import itertools
from typing import Dict, List, Optional, Tuple

import pytest
from fastapi.testclient import TestClient

from petrohr.api.deps import get_cache, get_document_storage, get_event_publisher
from petrohr.core.config import settings
from petrohr.core.token_factory import create_token
from petrohr.database import Base, SessionLocal, engine, get_db
from petrohr.exceptions import StorageError
from petrohr.main import app
from petrohr.services.employee_cache import EmployeeCache
from petrohr.services.project_events import ProjectEventPublisher
from petrohr.services.storage_service import UploadResult


class FakeRedis:
    """The slice of the redis-py client the app uses, kept in a dict."""

    def __init__(self):
        self.store: Dict[str, str] = {}
        self.expiries: Dict[str, Optional[int]] = {}
        self.published: List[Tuple[str, str]] = []

    def get(self, key):
        return self.store.get(key)

    def set(self, key, value, ex=None):
        self.store[key] = value
        self.expiries[key] = ex
        return True

    def delete(self, *keys):
        removed = 0
        for key in keys:
            if self.store.pop(key, None) is not None:
                removed += 1
            self.expiries.pop(key, None)
        return removed

    def publish(self, channel, message):
        self.published.append((channel, message))
        return 0


class FakeStorage:
    """Records uploads and deletions instead of talking to MinIO."""

    def __init__(self):
        self.uploads: List[dict] = []
        self.destroyed: List[str] = []
        self.fail_upload = False
        # Number of uploads to accept before failing; None never fails.
        self.fail_after: Optional[int] = None
        self.fail_destroy = False
        self._counter = itertools.count(1)

    def upload(self, content, mime_type, original_name, folder):
        if self.fail_upload or (self.fail_after is not None and len(self.uploads) >= self.fail_after):
            raise StorageError("Upload rejected by store")
        n = next(self._counter)
        public_id = f"{folder}/{n}-{original_name}"
        self.uploads.append({
            "content": content,
            "mime_type": mime_type,
            "name": original_name,
            "folder": folder,
            "public_id": public_id,
        })
        return UploadResult(
            url=f"http://storage.test/{public_id}",
            public_id=public_id,
            size=len(content),
            format=original_name.rsplit(".", 1)[-1].lower() if "." in original_name else None,
            resource_type="raw" if mime_type == "application/pdf" else "image",
        )

    def destroy(self, public_id):
        if self.fail_destroy:
            raise StorageError("Delete rejected by store", public_id=public_id)
        self.destroyed.append(public_id)


@pytest.fixture(autouse=True)
def _fresh_schema():
    """Recreate all tables before each test for isolation."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture()
def db():
    """Per-test database session."""
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture()
def fake_redis():
    return FakeRedis()


@pytest.fixture()
def cache(fake_redis):
    return EmployeeCache(fake_redis, ttl_seconds=settings.employee_cache_ttl_seconds)


@pytest.fixture()
def storage():
    return FakeStorage()


@pytest.fixture()
def events(fake_redis):
    return ProjectEventPublisher(fake_redis)


@pytest.fixture()
def client(db, cache, storage, events):
    """FastAPI TestClient with database, cache, storage and events overridden."""

    def _override_get_db():
        yield db

    app.dependency_overrides[get_db] = _override_get_db
    app.dependency_overrides[get_cache] = lambda: cache
    app.dependency_overrides[get_document_storage] = lambda: storage
    app.dependency_overrides[get_event_publisher] = lambda: events
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture()
def auth_headers() -> dict:
    """Valid bearer token headers for when auth is enabled."""
    token = create_token(subject="test-user", role="admin", secret=settings.jwt_secret_key)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def employee(client) -> dict:
    """An employee created through the API."""
    resp = client.post(
        "/api/employees",
        data={"name": "Amina Diallo", "email": "amina@example.com", "position": "Driller"},
    )
    assert resp.status_code == 201, resp.text
    return resp.json()


@pytest.fixture()
def project(client) -> dict:
    resp = client.post("/api/projects", json={"name": "Offshore Block 7", "location": "Gulf"})
    assert resp.status_code == 201, resp.text
    return resp.json()


@pytest.fixture()
def assigned(client, project, employee) -> Tuple[str, str]:
    """(project_id, employee_id) with the employee on the project team."""
    resp = client.post(
        f"/api/projects/{project['id']}/employees",
        json={"employeeId": employee["id"], "role": "Operator"},
    )
    assert resp.status_code == 201, resp.text
    return project["id"], employee["id"]
