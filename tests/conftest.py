"""
Configuration for pytest.

This module provides fixtures and configuration for running tests.
"""

import os

os.environ["ENVIRONMENT"] = "testing"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["SECRET_KEY"] = "test-secret-key-for-jwt-signing-only"
os.environ["CACHE_ENABLED"] = "false"

from typing import AsyncGenerator, Dict

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from agri_inventory.core.auth import issue_access_token
from agri_inventory.core.security import get_password_hash
from agri_inventory.db.session import get_db
from agri_inventory.main import app
from agri_inventory.models import Base
from agri_inventory.models.enums import Role
from agri_inventory.models.user import User
from agri_inventory.schemas.user import SessionUser
from agri_inventory.services.department import DepartmentService

TEST_DATABASE_URL = "sqlite+aiosqlite://"
PASSWORD = "Secret123"


@pytest.fixture
async def test_engine():
    """Fresh in-memory database per test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    @event.listens_for(engine.sync_engine, "connect")
    def enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    TestSessionLocal = sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)
    async with TestSessionLocal() as session:
        yield session


@pytest.fixture
async def async_client(db_session):
    """Create an async test client bound to the test session."""
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
async def departments(db_session):
    """The reference departments."""
    return await DepartmentService.seed_reference_departments(db_session)


async def _make_user(db_session, email, role, department_id=None, name="Test User"):
    user = User(
        name=name,
        email=email,
        password=get_password_hash(PASSWORD),
        role=role,
        department_id=department_id,
    )
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


@pytest.fixture
async def admin_user(db_session, departments):
    return await _make_user(db_session, "admin@mnsuam.edu.pk", Role.ADMIN, name="Admin User")


@pytest.fixture
async def cri_head(db_session, departments):
    return await _make_user(db_session, "head.cri@mnsuam.edu.pk", Role.DEPT_HEAD, "cri", name="CRI Head")


@pytest.fixture
async def rari_head(db_session, departments):
    return await _make_user(db_session, "head.rari@mnsuam.edu.pk", Role.DEPT_HEAD, "rari", name="RARI Head")


@pytest.fixture
async def unassigned_head(db_session, departments):
    return await _make_user(db_session, "head.none@mnsuam.edu.pk", Role.DEPT_HEAD, name="Unassigned Head")


def session_for(user: User) -> SessionUser:
    return SessionUser(
        id=user.id,
        email=user.email,
        name=user.name,
        role=user.role,
        department_id=user.department_id,
    )


def auth_headers(user: User) -> Dict[str, str]:
    return {"Authorization": f"Bearer {issue_access_token(user)}"}


@pytest.fixture
def admin_session(admin_user) -> SessionUser:
    return session_for(admin_user)


@pytest.fixture
def cri_session(cri_head) -> SessionUser:
    return session_for(cri_head)


@pytest.fixture
def rari_session(rari_head) -> SessionUser:
    return session_for(rari_head)


@pytest.fixture
def admin_headers(admin_user) -> Dict[str, str]:
    return auth_headers(admin_user)


@pytest.fixture
def cri_headers(cri_head) -> Dict[str, str]:
    return auth_headers(cri_head)


@pytest.fixture
def revalidations(monkeypatch):
    """Record every revalidation signal sent by the service layer."""
    calls = []

    async def record(*paths):
        calls.append(paths)
        return 0

    for module in (
        "agri_inventory.services.repository",
        "agri_inventory.services.equipment",
        "agri_inventory.services.maintenance",
        "agri_inventory.services.department",
        "agri_inventory.services.bulk_import",
        "agri_inventory.services.user",
    ):
        monkeypatch.setattr(f"{module}.revalidate_paths", record)
    return calls
