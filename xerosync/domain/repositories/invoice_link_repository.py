"""Repository interface for order to invoice links."""

from abc import ABC, abstractmethod
from typing import Optional

from ..entities.invoice_link import InvoiceLink


class InvoiceLinkRepository(ABC):
    """Abstract repository for InvoiceLink persistence."""

    @abstractmethod
    async def find_by_order_id(self, order_id: str) -> Optional[InvoiceLink]:
        """Retrieve the link for an order.

        Args:
            order_id: Commerce order identifier

        Returns:
            InvoiceLink if the order has been invoiced, None otherwise
        """
        pass

    @abstractmethod
    async def create(self, order_id: str, invoice_id: str) -> InvoiceLink:
        """Record that ``order_id`` was invoiced as ``invoice_id``.

        Raises:
            DuplicateLinkError: If the order already has a link
        """
        pass
