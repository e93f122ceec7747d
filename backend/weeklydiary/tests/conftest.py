"""
tests/conftest.py
"""
import os
import tempfile
from typing import Callable, Generator

# Settings are read at import time, so the environment must be ready first.
_TMP_DIR = tempfile.mkdtemp(prefix="weeklydiary-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP_DIR, 'test.sqlite3')}"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["DB_RETRY_DELAY"] = "0"
os.environ["R2_ACCOUNT_ID"] = "testaccount"
os.environ["R2_BUCKET"] = "diary-photos"
os.environ["R2_ACCESS_KEY_ID"] = "AKIDTEST"
os.environ["R2_SECRET_ACCESS_KEY"] = "secret-test-key"
os.environ["R2_PUBLIC_URL"] = "https://cdn.example.test"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from weeklydiary.main import app
from weeklydiary.db.base import Base
from weeklydiary.db.session import SessionLocal, engine
import weeklydiary.models  # noqa: F401

BASE_URL = "https://testserver"


@pytest.fixture(autouse=True)
def _fresh_db() -> Generator[None, None, None]:
    """Every test starts from empty tables."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db() -> Generator[Session, None, None]:
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def anon_client() -> TestClient:
    """Client without any cookies or CSRF header."""
    return TestClient(app, base_url=BASE_URL)


@pytest.fixture
def make_client() -> Callable[[], TestClient]:
    """Factory for clients that already hold a CSRF cookie and echo it in a header."""
    def _make() -> TestClient:
        c = TestClient(app, base_url=BASE_URL)
        token = c.get("/api/csrf").json()["csrfToken"]
        c.headers["X-CSRF-Token"] = token
        return c
    return _make


@pytest.fixture
def client(make_client) -> TestClient:
    return make_client()


def signup(c: TestClient, username: str = "alice", password: str = "secret1", **extra) -> str:
    """Sign up through the API and return the new user id."""
    response = c.post("/api/auth/signup", json={"username": username, "password": password, **extra})
    assert response.status_code == 201, response.text
    return response.json()["userId"]


@pytest.fixture
def alice(client) -> TestClient:
    """Client logged in as a freshly signed-up user 'alice'."""
    signup(client, "alice", "secret1")
    return client


@pytest.fixture
def register() -> Callable[..., str]:
    return signup
