"""Shared pytest fixtures configured to use SQLite in-memory for unit tests."""

import logging
import os

# settings are read at import time
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("LOG_TO_FILE", "false")
os.environ.setdefault("REDIS_URL", "redis://localhost:6379/15")
os.environ["ONBOARDHUB_SKIP_LIFESPAN_DB"] = "1"

from uuid import uuid4

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from src.onboardhub.core.models import (
    BaseModel,
    Resource,
    ResourceCategory,
    ShareRecord,
    TemplateItem,
    User,
    Version,
)
from src.onboardhub.database import get_db_session
from src.onboardhub.main import app
from src.onboardhub.security.jwt import create_identity_token
from src.onboardhub.security.password import hash_password

# Silence extremely verbose DEBUG logs from aiosqlite to keep test output readable
logging.getLogger("aiosqlite").setLevel(logging.WARNING)

TEST_PASSWORD = "TestPassword123!"


@pytest.fixture
async def test_engine():
    """Fresh in-memory SQLite database per test."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        echo=False,
        poolclass=StaticPool,  # keep the same memory DB across connections
        connect_args={"check_same_thread": False},
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _sqlite_connect(dbapi_connection, connection_record):  # noqa: ANN001
        # let SQLAlchemy emit BEGIN itself so SAVEPOINTs work
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        try:
            cursor.execute("PRAGMA foreign_keys=ON")
        finally:
            cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def _sqlite_begin(conn):  # noqa: ANN001
        conn.exec_driver_sql("BEGIN")

    async with engine.begin() as conn:
        await conn.run_sync(BaseModel.metadata.create_all)

    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
async def test_session(test_engine):
    """Database session bound to the per-test engine."""
    session_maker = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)
    async with session_maker() as session:
        try:
            yield session
        finally:
            await session.rollback()


@pytest.fixture
def test_app(test_session):
    """App with the DB-session dependency pointed at the test session."""

    async def _override_get_db():
        yield test_session

    app.dependency_overrides[get_db_session] = _override_get_db
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def async_client(test_app):
    """In-process HTTP client."""
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def make_user(test_session):
    """Factory creating active users with a known password."""

    async def _make_user(name: str = "Test User", email: str = None, with_password: bool = True) -> User:
        user = User(
            email=email or f"user_{uuid4().hex[:8]}@company.com",
            name=name,
            password_hash=hash_password(TEST_PASSWORD) if with_password else None,
            is_active=True,
        )
        test_session.add(user)
        await test_session.commit()
        await test_session.refresh(user)
        return user

    return _make_user


@pytest.fixture
def make_version(test_session):
    async def _make_version(user: User, name: str = "Default", is_default: bool = True) -> Version:
        version = Version(user_id=user.id, name=name, is_default=is_default)
        test_session.add(version)
        await test_session.commit()
        await test_session.refresh(version)
        return version

    return _make_version


@pytest.fixture
def make_template(test_session):
    async def _make_template(
        user: User,
        title: str,
        period: str = "firstDay",
        version: Version = None,
        priority: str = "medium",
        completed: bool = False,
    ) -> TemplateItem:
        item = TemplateItem(
            user_id=user.id,
            version_id=version.id if version else None,
            period=period,
            title=title,
            priority=priority,
            completed=completed,
        )
        test_session.add(item)
        await test_session.commit()
        await test_session.refresh(item)
        return item

    return _make_template


@pytest.fixture
def make_category(test_session):
    """Factory for a category with ``(name, url)`` resources."""

    async def _make_category(
        user: User, label: str, resources=(), version: Version = None
    ) -> ResourceCategory:
        category = ResourceCategory(
            user_id=user.id,
            version_id=version.id if version else None,
            category=label,
            job=f"find {label.lower()}",
            situation="I am new",
            outcome="I can get started",
        )
        test_session.add(category)
        await test_session.flush()
        for name, url in resources:
            test_session.add(Resource(category_id=category.id, name=name, type="tool", url=url))
        await test_session.commit()
        return category

    return _make_category


@pytest.fixture
def make_share(test_session):
    """Factory writing share records directly, bypassing the issuer."""

    async def _make_share(owner: User, version: Version = None, **overrides) -> ShareRecord:
        data = {
            "owner_user_id": owner.id,
            "version_id": version.id if version else None,
            "invite_token": ShareRecord.generate_invite_token(),
            "title": "Team onboarding",
            "clone_count": 0,
            "is_active": True,
        }
        data.update(overrides)
        share = ShareRecord(**data)
        test_session.add(share)
        await test_session.commit()
        await test_session.refresh(share)
        return share

    return _make_share


def _bearer(user: User) -> dict:
    token = create_identity_token(user.id, user.email, user.name)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_for():
    """Bearer header factory carrying a user's identity claims."""
    return _bearer


@pytest.fixture
async def test_user(make_user):
    return await make_user(name="Test User", email="test.user@company.com")


@pytest.fixture
def auth_headers(test_user):
    """Create authentication headers with a valid JWT token."""
    return _bearer(test_user)
