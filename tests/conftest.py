"""
Shared test fixtures for the attendance log test suite.

Each test gets a fresh in-memory SQLite database (aiosqlite + StaticPool)
wired into the app through a ``get_db`` dependency override.
"""

import os
import sys
from typing import AsyncGenerator

import pytest

# Ensure project root is importable
ROOT_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

# Override environment BEFORE importing application modules
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["CORS_ORIGINS"] = '["*"]'
os.environ["TOKEN_SCHEME"] = "plain"

from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from shiftlog.api.deps import get_db
from shiftlog.client import ShiftLogClient
from shiftlog.core.config import settings
from shiftlog.db.base import Base
from shiftlog.main import app

DEV_HEADERS = {"Authorization": f"Bearer {settings.DEV_BYPASS_TOKEN}"}


@pytest.fixture
async def session_factory() -> AsyncGenerator[async_sessionmaker, None]:
    """Create all tables on a private engine and route the app to it."""
    test_engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)

    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with factory() as session:
            yield session

    app.dependency_overrides[get_db] = _override_get_db
    yield factory

    app.dependency_overrides.pop(get_db, None)
    await test_engine.dispose()


@pytest.fixture
async def async_client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """httpx AsyncClient wired to the app, carrying the development token."""
    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport, base_url="http://test", headers=DEV_HEADERS
    ) as client:
        yield client


@pytest.fixture
async def anon_client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """Same as ``async_client`` but without an Authorization header."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Return a raw database session for direct queries in tests."""
    async with session_factory() as session:
        yield session


@pytest.fixture
async def api(session_factory) -> AsyncGenerator[ShiftLogClient, None]:
    """The Python API client talking to the app in-process."""
    async with ShiftLogClient(
        base_url="http://test/api", transport=ASGITransport(app=app)
    ) as client:
        yield client


@pytest.fixture
def new_employee(async_client: AsyncClient):
    """Factory: register an employee through the API and return its data."""

    async def _make(code="EMP-001", name="Asha Rao", shift="Morning", **extra):
        resp = await async_client.post(
            "/api/employees",
            json={"employee_id": code, "name": name, "shift": shift, **extra},
        )
        assert resp.status_code == 201, resp.text
        return resp.json()["data"]

    return _make
