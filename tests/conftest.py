"""Shared fixtures for the sync pipeline tests."""

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from tests.factories import FIXED_NOW, RECEIVABLE_ACCOUNT, make_settings
from tests.mocks.mock_xero_client import MockXeroClient
from xerosync.data.models.base import Base
from xerosync.data.uow import create_uow
from xerosync.infrastructure.event_bus import InMemoryEventBus
from xerosync.settings import SyncSettings


# Use in-memory SQLite for testing
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
def settings() -> SyncSettings:
    return make_settings()


@pytest.fixture
def clock():
    return lambda: FIXED_NOW


@pytest.fixture
def xero_client() -> MockXeroClient:
    return MockXeroClient(accounts=[RECEIVABLE_ACCOUNT])


@pytest.fixture
def event_bus() -> InMemoryEventBus:
    return InMemoryEventBus()


@pytest_asyncio.fixture
async def test_engine():
    """Create test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    # Cleanup
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def test_session_factory(test_engine):
    """Create test session factory."""
    yield async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def uow_factory(test_session_factory):
    return lambda: create_uow(test_session_factory)
