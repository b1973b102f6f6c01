"""Shared fixtures: a throwaway SQLite database, sync sessions and API clients."""

import os
import tempfile

# Settings are read once at import time, so point them at SQLite first.
_DB_DIR = tempfile.mkdtemp(prefix="compass-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_DB_DIR}/compass.db"
os.environ["WORKER_SECRET"] = "test-worker-secret"
os.environ["SECRET_KEY"] = "test-secret-key"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from compass.main import app  # noqa: E402
from compass.models import Base  # noqa: E402
from compass.models.base import SyncSessionLocal, sync_engine  # noqa: E402
from compass.services.auth_service import create_user  # noqa: E402

WORKER_SECRET = "test-worker-secret"
ADMIN_EMAIL = "admin@hawaii.edu"
ADMIN_PASSWORD = "admin-password"
USER_EMAIL = "student@hawaii.edu"
USER_PASSWORD = "student-password"


@pytest.fixture(autouse=True)
def _schema():
    Base.metadata.create_all(sync_engine)
    yield
    Base.metadata.drop_all(sync_engine)


@pytest.fixture
def db():
    session = SyncSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def admin_user(db):
    return create_user(db, ADMIN_EMAIL, ADMIN_PASSWORD, "Admin", is_admin=True)


@pytest.fixture
def regular_user(db):
    return create_user(db, USER_EMAIL, USER_PASSWORD, "Student")


@pytest.fixture
def admin_client(client, admin_user):
    resp = client.post("/api/v1/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert resp.status_code == 200
    return client


@pytest.fixture
def user_client(client, regular_user):
    resp = client.post("/api/v1/auth/login", json={"email": USER_EMAIL, "password": USER_PASSWORD})
    assert resp.status_code == 200
    return client


@pytest.fixture
def scheduler_headers():
    return {"Authorization": f"Bearer {WORKER_SECRET}"}
