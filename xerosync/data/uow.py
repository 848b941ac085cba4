"""Unit of Work pattern for atomic transactions."""

from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from xerosync.domain.errors import LinkPersistenceError

from .repositories.invoice_link_repository_impl import SqlAlchemyInvoiceLinkRepository


class UnitOfWork:
    """
    Unit of Work pattern for atomic transactions.

    Responsibilities:
    1. Manage SQLAlchemy session lifecycle
    2. Atomic commit/rollback of all repository operations
    3. Lazy initialization of repositories
    """

    def __init__(self, session_factory: async_sessionmaker) -> None:
        """Initialize Unit of Work.

        Args:
            session_factory: SQLAlchemy async session factory
        """
        self._session_factory = session_factory
        self._session: Optional[AsyncSession] = None

        # Lazy-loaded repositories
        self._invoice_link_repository: Optional[SqlAlchemyInvoiceLinkRepository] = None

    async def __aenter__(self) -> "UnitOfWork":
        """Start transaction scope."""
        self._session = self._session_factory()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Rollback on exception, always close."""
        if exc_type is not None:
            await self._session.rollback()
        await self._session.close()
        self._session = None
        self._invoice_link_repository = None

    @property
    def invoice_links(self) -> SqlAlchemyInvoiceLinkRepository:
        """Lazy-load invoice link repository.

        Returns:
            SqlAlchemyInvoiceLinkRepository instance
        """
        if self._session is None:
            raise RuntimeError("UnitOfWork not initialized. Use async context manager.")
        if self._invoice_link_repository is None:
            self._invoice_link_repository = SqlAlchemyInvoiceLinkRepository(self._session)
        return self._invoice_link_repository

    async def commit(self) -> None:
        """Commit all pending changes."""
        if self._session is None:
            raise RuntimeError("UnitOfWork not initialized. Use async context manager.")
        try:
            await self._session.commit()
        except SQLAlchemyError as e:
            raise LinkPersistenceError(f"Commit failed: {e}") from e

    async def rollback(self) -> None:
        """Rollback all pending changes."""
        if self._session is None:
            raise RuntimeError("UnitOfWork not initialized. Use async context manager.")
        await self._session.rollback()


def create_uow(session_factory: async_sessionmaker) -> UnitOfWork:
    """Create a new Unit of Work instance.

    Args:
        session_factory: SQLAlchemy async session factory

    Returns:
        UnitOfWork instance
    """
    return UnitOfWork(session_factory)
