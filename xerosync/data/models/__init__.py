"""Database models."""

from .base import Base
from .invoice_link_model import InvoiceLinkModel

__all__ = ["Base", "InvoiceLinkModel"]
