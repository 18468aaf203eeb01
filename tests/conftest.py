"""
Test configuration and fixtures.

Provides:
- In-memory SQLite database, tables rebuilt for every test
- Session overrides standing in for the hosted auth provider
- HTTPX AsyncClient per role, with the CSRF header set
"""
import os
import uuid
from typing import AsyncGenerator, Callable, Generator

# Must be set before the app (and its engine/limiter) is imported
os.environ["DATABASE_URL"] = "sqlite+pysqlite:///:memory:"
os.environ["TESTING"] = "1"
os.environ.setdefault("ENV", "test")
os.environ.setdefault("SPACES_BUCKET", "asme-media")
os.environ.setdefault("SPACES_REGION", "nyc3")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.orm import Session

from asme.main import app
from asme.core.deps import get_current_session, get_db
from asme.db import models  # noqa: F401  (registers tables)
from asme.db.base import Base
from asme.db.enums import Role
from asme.db.session import SessionLocal, engine
from asme.schemas.auth import UserSession

CSRF_HEADERS = {"X-Requested-With": "XMLHttpRequest"}


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """Fresh schema per test; app code is free to commit."""
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


# =============================================================================
# Auth Fixtures
# =============================================================================

def make_session(role: Role | None = Role.ADMIN) -> UserSession:
    return UserSession(
        user_id=uuid.uuid4(),
        email=f"staff-{uuid.uuid4().hex[:8]}@asme.mx",
        role=role,
        display_name="Staff Test",
    )


# =============================================================================
# Client Fixtures
# =============================================================================

@pytest.fixture(scope="function")
async def client(db: Session) -> AsyncGenerator[AsyncClient, None]:
    """Unauthenticated AsyncClient for public endpoints."""
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def client_for(db: Session) -> Generator[Callable[..., AsyncClient], None, None]:
    """
    Factory for authenticated clients.

    Usage:
        async with client_for(Role.VIEWER) as c:
            ...
    """
    def override_get_db():
        yield db

    def factory(role: Role | None = Role.ADMIN, *, csrf: bool = True) -> AsyncClient:
        session = make_session(role)
        app.dependency_overrides[get_db] = override_get_db
        app.dependency_overrides[get_current_session] = lambda: session
        return AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
            headers=CSRF_HEADERS if csrf else {},
        )

    yield factory
    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
async def authed_client(client_for) -> AsyncGenerator[AsyncClient, None]:
    """Admin AsyncClient with the CSRF header."""
    async with client_for(Role.ADMIN) as c:
        yield c


# =============================================================================
# External service fakes
# =============================================================================

class FakeS3Client:
    """Records object operations instead of talking to S3/Spaces."""

    def __init__(self):
        self.objects: dict[str, bytes] = {}
        self.deleted: list[str] = []

    def put_object(self, Bucket, Key, Body, **kwargs):
        self.objects[Key] = Body if isinstance(Body, bytes) else Body.read()
        return {}

    def upload_fileobj(self, Fileobj, Bucket, Key, ExtraArgs=None):
        self.objects[Key] = Fileobj.read()

    def delete_object(self, Bucket, Key):
        self.deleted.append(Key)
        self.objects.pop(Key, None)
        return {}

    def delete_objects(self, Bucket, Delete):
        for item in Delete.get("Objects", []):
            self.deleted.append(item["Key"])
            self.objects.pop(item["Key"], None)
        return {}

    def generate_presigned_url(self, ClientMethod, Params, ExpiresIn):
        return f"https://signed.test/{Params['Key']}?expires={ExpiresIn}"


@pytest.fixture
def fake_spaces(monkeypatch) -> FakeS3Client:
    from asme.services import media_service

    fake = FakeS3Client()
    monkeypatch.setattr(media_service, "get_spaces_client", lambda: fake)
    return fake


@pytest.fixture
def fake_documents(monkeypatch) -> FakeS3Client:
    from asme.services import case_document_service

    fake = FakeS3Client()
    monkeypatch.setattr(case_document_service, "get_documents_client", lambda: fake)
    return fake


@pytest.fixture
def sent_emails(monkeypatch) -> list[dict]:
    """Capture outgoing email instead of calling Resend."""
    from asme.services import email_service

    sent: list[dict] = []

    async def fake_send_email(**kwargs):
        sent.append(kwargs)
        return f"msg-{len(sent)}"

    monkeypatch.setattr(email_service, "send_email", fake_send_email)
    return sent
