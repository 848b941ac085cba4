"""
Order sync domain events.

Published on the event bus as the pipeline progresses. All events are
keyed by the commerce order id.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from .base import DomainEvent


@dataclass
class _OrderScopedEvent(DomainEvent):
    order_id: str = ""

    def __post_init__(self):
        """Set aggregate_id to order_id."""
        if not self.aggregate_id and self.order_id:
            object.__setattr__(self, 'aggregate_id', self.order_id)
        super().__post_init__()


@dataclass
class ContactCreatedEvent(_OrderScopedEvent):
    """A new Contact was created remotely for the order's purchaser."""

    contact_id: Optional[str] = None
    name: str = ""


@dataclass
class InvoiceSavingEvent(_OrderScopedEvent):
    """An invoice is about to be saved for the first time."""

    invoice_number: str = ""
    lines_count: int = 0


@dataclass
class InvoiceRoundingAdjustedEvent(_OrderScopedEvent):
    """A rounding line was appended and the invoice re-saved."""

    invoice_id: Optional[str] = None
    order_total: Optional[Decimal] = None
    remote_total: Optional[Decimal] = None
    adjustment: Optional[Decimal] = None


@dataclass
class InvoiceCreatedEvent(_OrderScopedEvent):
    """The invoice was saved and linked to the order."""

    invoice_id: Optional[str] = None
    invoice_number: str = ""
    total: Optional[Decimal] = None
    lines_count: int = 0


@dataclass
class PaymentRecordedEvent(_OrderScopedEvent):
    """A payment was recorded against the order's invoice."""

    invoice_id: Optional[str] = None
    payment_id: Optional[str] = None
    amount: Optional[Decimal] = None


@dataclass
class OrderSyncedEvent(_OrderScopedEvent):
    """The order completed the sync pipeline."""

    invoice_id: Optional[str] = None
    payment_id: Optional[str] = None


@dataclass
class OrderSyncFailedEvent(_OrderScopedEvent):
    """The sync pipeline stopped at ``stage``."""

    stage: str = ""
    error_kind: str = ""
    error_message: str = ""
