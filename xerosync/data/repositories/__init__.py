"""Repository implementations."""

from .invoice_link_repository_impl import SqlAlchemyInvoiceLinkRepository

__all__ = ["SqlAlchemyInvoiceLinkRepository"]
