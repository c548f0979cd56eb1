"""
Shared fixtures.

The app runs against a private in-memory SQLite database per test; the
module-level MySQL engine is never touched.  Outbound mail is captured
instead of sent.
"""

import os

# Must be in place before core.config is first imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["PASSWORD_HASH_ROUNDS"] = "1000"
os.environ["FRONTEND_URL"] = "http://localhost:3000"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from core import mailer  # noqa: E402
from database import Base, get_db  # noqa: E402
from main import app  # noqa: E402


@pytest.fixture
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(eng)
    yield eng
    Base.metadata.drop_all(eng)
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db_session(session_factory):
    db = session_factory()
    yield db
    db.close()


@pytest.fixture
def client(session_factory):
    def _get_test_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _get_test_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def outbox(monkeypatch):
    """Collects (recipient, reset_link) pairs instead of talking SMTP."""
    sent = []
    monkeypatch.setattr(mailer, "send_reset_email", lambda to, link: sent.append((to, link)))
    return sent


# -- helpers ---------------------------------------------------------------


def register(client, **overrides):
    payload = {
        "username": "alice",
        "email": "alice@x.com",
        "contact": "9999999999",
        "password": "pw123",
        "role": "citizen",
    }
    payload.update(overrides)
    return client.post("/auth/register", json=payload)


def login(client, username="alice", password="pw123", role="citizen"):
    return client.post(
        "/auth/login",
        json={"username": username, "password": password, "role": role},
    )


def new_document(client, **overrides):
    payload = {
        "id": "DOC-2026-0001",
        "senderOrg": "Water Board",
        "applicantName": "Bob Kumar",
        "orgEmail": "desk@waterboard.org",
        "contactNumber": "8888888888",
        "receivedOffice": "Central Registry",
        "receiptDate": "2026-10-01",
        "purpose": "Connection request",
        "details": "Two copies, stamped",
        "submittedBy": "org@x.com",
        "role": "organization",
    }
    payload.update(overrides)
    return client.post("/new-document", json=payload)

