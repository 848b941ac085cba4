"""Repository interfaces."""

from .invoice_link_repository import InvoiceLinkRepository

__all__ = ["InvoiceLinkRepository"]
