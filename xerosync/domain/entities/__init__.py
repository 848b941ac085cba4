"""Domain entities."""

from .accounting import (
    Account,
    Contact,
    Invoice,
    InvoiceStatus,
    InvoiceType,
    LineAmountType,
    LineItem,
    Payment,
)
from .invoice_link import InvoiceLink
from .order import AdjustmentType, Order, OrderAdjustment, OrderLineItem, Purchaser

__all__ = [
    "Account",
    "Contact",
    "Invoice",
    "InvoiceStatus",
    "InvoiceType",
    "LineAmountType",
    "LineItem",
    "Payment",
    "InvoiceLink",
    "AdjustmentType",
    "Order",
    "OrderAdjustment",
    "OrderLineItem",
    "Purchaser",
]
