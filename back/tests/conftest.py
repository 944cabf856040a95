"""
Shared pytest fixtures for the Janakural backend test suite.

Each test gets its own in-memory SQLite database (aiosqlite), a fake push
service, a recording event publisher and an httpx AsyncClient wired to the
FastAPI app with the storage and event dependencies overridden. No Postgres,
Redis, Firebase or MinIO is needed.
"""

import os

# Settings are read at import time, so configure them before importing the app
os.environ.setdefault("ENVIRONMENT", "dev")
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["JWT_SECRET_KEY"] = "test-secret-key"

from uuid import UUID

import httpx
from jose import jwt
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.core.db import get_async_session
from app.models import AdminRole, AdminUser
from app.models.base import Base
from app.schemas.notifications.push_schemas import MulticastResult, PushMessage, TokenDeliveryOutcome
from app.services.events.event_publisher import get_event_publisher
from app.services.storage.s3_service import get_storage_service
from app.settings import settings
from app.utils.validators.phone_validator import admin_id_from_phone
from main import app


# ─── Fakes ────────────────────────────────────────────────────────────────────

class FakePushService:
    """Stands in for FCMService; records every message and fails selected tokens."""

    def __init__(self, failing_tokens=(), error: Exception | None = None):
        self.failing_tokens = set(failing_tokens)
        self.error = error
        self.messages: list[PushMessage] = []

    async def send_multicast(self, message: PushMessage) -> MulticastResult:
        if self.error is not None:
            raise self.error
        self.messages.append(message)

        outcomes = []
        for index, token in enumerate(message.tokens):
            failed = token in self.failing_tokens
            outcomes.append(
                TokenDeliveryOutcome(
                    index=index,
                    token=token,
                    success=not failed,
                    message_id=None if failed else f"projects/test/messages/{index}",
                    error="Requested entity was not found." if failed else None,
                )
            )
        failures = sum(1 for outcome in outcomes if not outcome.success)
        return MulticastResult(
            success_count=len(outcomes) - failures,
            failure_count=failures,
            outcomes=outcomes,
        )


class RecordingPublisher:
    def __init__(self):
        self.issues_created: list[UUID] = []
        self.notifications_created: list[UUID] = []

    def issue_created(self, issue_id: UUID) -> None:
        self.issues_created.append(issue_id)

    def notification_created(self, notification_id: UUID) -> None:
        self.notifications_created.append(notification_id)


class FakeStorage:
    def __init__(self):
        self.uploads: list[tuple[UUID, str, int, bytes, str | None]] = []

    async def upload_issue_photo(self, issue_id, kind, index, file_data, content_type):
        self.uploads.append((issue_id, kind, index, file_data, content_type))
        return f"http://storage.test/issues/{issue_id}/{kind}_{index}.jpg"


# ─── Database ─────────────────────────────────────────────────────────────────

@pytest_asyncio.fixture
async def engine():
    """Fresh in-memory database per test; StaticPool keeps the single connection alive."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


async def create_admin(
    db: AsyncSession,
    phone: str,
    role: AdminRole,
    district: str | None = None,
    panchayat_union: str | None = None,
    fcm_token: str | None = None,
    is_active: bool = True,
    name: str = "",
) -> AdminUser:
    """Insert an administrator directly, bypassing area normalization."""
    admin = AdminUser(
        id=admin_id_from_phone(phone),
        phone=phone,
        name=name,
        role=role,
        assigned_district=district,
        assigned_panchayat_union=panchayat_union,
        fcm_token=fcm_token,
        is_active=is_active,
    )
    db.add(admin)
    await db.commit()
    await db.refresh(admin)
    return admin


def auth_headers(admin: AdminUser) -> dict:
    token = jwt.encode({"sub": admin.id}, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)
    return {"Authorization": f"Bearer {token}"}


# ─── Fakes as fixtures ────────────────────────────────────────────────────────

@pytest.fixture
def push_service():
    return FakePushService()


@pytest.fixture
def publisher():
    return RecordingPublisher()


@pytest.fixture
def storage():
    return FakeStorage()


# ─── HTTP client ──────────────────────────────────────────────────────────────

@pytest_asyncio.fixture
async def client(session_factory, publisher, storage):
    """In-process httpx AsyncClient against the app, one DB session per request."""

    async def override_get_async_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_async_session] = override_get_async_session
    app.dependency_overrides[get_event_publisher] = lambda: publisher
    app.dependency_overrides[get_storage_service] = lambda: storage

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as c:
        yield c

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def super_admin(db):
    return await create_admin(db, "+919876500001", AdminRole.SUPER_ADMIN, name="Super Admin")


@pytest_asyncio.fixture
async def super_admin_headers(super_admin):
    return auth_headers(super_admin)
