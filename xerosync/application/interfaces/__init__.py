"""Application layer interfaces."""
from abc import ABC, abstractmethod
from typing import Optional

from xerosync.domain.entities import Account, Contact, Invoice, Payment


class IAccountingClient(ABC):
    """
    Interface for accounting service operations.

    This interface defines the contract for the Xero integration,
    allowing the application layer to talk to the accounting service
    without depending on the SDK.

    Every method raises ``RemoteServiceError`` (message + code) when the
    remote call fails.
    """

    @abstractmethod
    async def find_contact(self, where: str) -> Optional[Contact]:
        """
        Return the first Contact matching a Xero ``where`` filter.

        Args:
            where: Filter expression, e.g. 'Name=="Jane Doe"'

        Returns:
            Contact if found, None otherwise
        """
        pass

    @abstractmethod
    async def create_contact(self, contact: Contact) -> Contact:
        """
        Create a Contact.

        Returns:
            The saved Contact with ``contact_id`` set
        """
        pass

    @abstractmethod
    async def save_invoice(self, invoice: Invoice) -> Invoice:
        """
        Create or update an Invoice.

        An invoice with ``invoice_id`` set is updated in place; otherwise a
        new one is created.

        Returns:
            The saved Invoice with ``invoice_id`` and ``total`` set
        """
        pass

    @abstractmethod
    async def find_account_by_code(self, code: str) -> Optional[Account]:
        """
        Get an Account by its code.

        Returns:
            Account if found, None otherwise
        """
        pass

    @abstractmethod
    async def create_payment(self, payment: Payment) -> Payment:
        """
        Record a Payment against an invoice.

        Returns:
            The saved Payment with ``payment_id`` set
        """
        pass


from .filters import equals, quote

__all__ = ["IAccountingClient", "equals", "quote"]
