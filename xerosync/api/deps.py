"""FastAPI dependencies for dependency injection."""

from functools import lru_cache

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from xerosync.application.use_cases import SyncOrderUseCase
from xerosync.data.uow import UnitOfWork, create_uow
from xerosync.infrastructure.adapters.xero import XeroAccountingClient
from xerosync.infrastructure.database import create_engine, create_session_factory
from xerosync.infrastructure.event_bus import get_event_bus
from xerosync.settings import XeroSettings, get_app_settings


@lru_cache()
def get_engine() -> AsyncEngine:
    """Get the process-wide async engine."""
    return create_engine(get_app_settings().database)


@lru_cache()
def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Get SQLAlchemy session factory.

    Returns:
        async_sessionmaker instance
    """
    return create_session_factory(get_engine())


def get_uow() -> UnitOfWork:
    """Get Unit of Work instance.

    Returns:
        UnitOfWork instance
    """
    return create_uow(get_session_factory())


@lru_cache()
def get_accounting_client() -> XeroAccountingClient:
    """Get the Xero client (credentials loaded from env on first use)."""
    return XeroAccountingClient(XeroSettings())


@lru_cache()
def get_sync_order_use_case() -> SyncOrderUseCase:
    """Get SyncOrderUseCase singleton.

    A single instance is shared so its per-order locks cover every request
    served by this process.
    """
    return SyncOrderUseCase(
        accounting_client=get_accounting_client(),
        uow_factory=get_uow,
        settings=get_app_settings().sync,
        event_bus=get_event_bus(),
    )
