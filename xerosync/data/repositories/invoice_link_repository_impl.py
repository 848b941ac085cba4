"""SQLAlchemy implementation of InvoiceLinkRepository."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from xerosync.domain.entities import InvoiceLink
from xerosync.domain.errors import DuplicateLinkError, LinkPersistenceError
from xerosync.domain.repositories import InvoiceLinkRepository

from ..models.invoice_link_model import InvoiceLinkModel


def _to_domain(model: InvoiceLinkModel) -> InvoiceLink:
    return InvoiceLink(
        order_id=model.order_id,
        invoice_id=model.invoice_id,
        created_at=model.created_at,
    )


class SqlAlchemyInvoiceLinkRepository(InvoiceLinkRepository):
    """Concrete implementation of InvoiceLinkRepository using SQLAlchemy."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with SQLAlchemy session.

        Args:
            session: SQLAlchemy async session
        """
        self._session = session

    async def find_by_order_id(self, order_id: str) -> Optional[InvoiceLink]:
        """Retrieve the link for an order.

        Args:
            order_id: Commerce order identifier

        Returns:
            InvoiceLink if found, None otherwise
        """
        try:
            result = await self._session.execute(
                select(InvoiceLinkModel).where(InvoiceLinkModel.order_id == order_id)
            )
        except SQLAlchemyError as e:
            raise LinkPersistenceError(
                f"Failed to read invoice link for order {order_id}: {e}"
            ) from e

        model = result.scalar_one_or_none()
        if not model:
            return None
        return _to_domain(model)

    async def create(self, order_id: str, invoice_id: str) -> InvoiceLink:
        """Insert a new link.

        The unique constraint on order_id is the final guard against a
        second link for the same order.

        Raises:
            DuplicateLinkError: If the order already has a link
            LinkPersistenceError: On any other database error
        """
        model = InvoiceLinkModel(order_id=order_id, invoice_id=invoice_id)
        self._session.add(model)
        try:
            await self._session.flush()  # Propagate to DB without committing
        except IntegrityError as e:
            await self._session.rollback()
            raise DuplicateLinkError(
                f"Order {order_id} already has an invoice link", code=order_id
            ) from e
        except SQLAlchemyError as e:
            await self._session.rollback()
            raise LinkPersistenceError(
                f"Failed to write invoice link for order {order_id}: {e}"
            ) from e
        return _to_domain(model)
