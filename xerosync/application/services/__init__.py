"""Sync pipeline stages."""

from .contact_resolver import ContactResolver, build_contact_filter
from .invoice_builder import InvoiceBuilder
from .invoice_submitter import InvoiceSubmitter, SubmittedInvoice
from .payment_recorder import PaymentRecorder

__all__ = [
    "ContactResolver",
    "build_contact_filter",
    "InvoiceBuilder",
    "InvoiceSubmitter",
    "SubmittedInvoice",
    "PaymentRecorder",
]
