"""Domain events."""

from .base import DomainEvent
from .sync_events import (
    ContactCreatedEvent,
    InvoiceCreatedEvent,
    InvoiceRoundingAdjustedEvent,
    InvoiceSavingEvent,
    OrderSyncedEvent,
    OrderSyncFailedEvent,
    PaymentRecordedEvent,
)

__all__ = [
    "DomainEvent",
    "ContactCreatedEvent",
    "InvoiceCreatedEvent",
    "InvoiceRoundingAdjustedEvent",
    "InvoiceSavingEvent",
    "OrderSyncedEvent",
    "OrderSyncFailedEvent",
    "PaymentRecordedEvent",
]
