"""
Accounting-side entities (Xero Contact, Invoice, LineItem, Payment, Account).

These mirror the remote objects closely enough for the pipeline to build
and inspect them. Identifiers and ``Invoice.total`` are assigned remotely.
"""
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import List, Optional


class InvoiceStatus(str, Enum):
    DRAFT = "DRAFT"
    SUBMITTED = "SUBMITTED"
    AUTHORISED = "AUTHORISED"


class InvoiceType(str, Enum):
    ACCREC = "ACCREC"  # accounts receivable
    ACCPAY = "ACCPAY"


class LineAmountType(str, Enum):
    EXCLUSIVE = "Exclusive"
    INCLUSIVE = "Inclusive"
    NO_TAX = "NoTax"


@dataclass
class Contact:
    name: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email_address: Optional[str] = None
    contact_id: Optional[str] = None


@dataclass
class Account:
    account_id: str
    code: str
    name: Optional[str] = None


@dataclass
class LineItem:
    """One billable row on an Invoice."""
    account_code: str
    description: str
    unit_amount: Decimal
    quantity: Decimal = Decimal("1")
    discount_rate: Optional[Decimal] = None
    item_code: Optional[str] = None


@dataclass
class Invoice:
    """
    Accounts receivable invoice.

    ``invoice_id`` and ``total`` are None until the invoice has been saved
    remotely.
    """
    contact: Contact
    invoice_number: str
    currency_code: str
    due_date: datetime
    status: InvoiceStatus = InvoiceStatus.AUTHORISED
    type: InvoiceType = InvoiceType.ACCREC
    line_amount_type: LineAmountType = LineAmountType.EXCLUSIVE
    sent_to_contact: bool = True
    line_items: List[LineItem] = field(default_factory=list)
    invoice_id: Optional[str] = None
    total: Optional[Decimal] = None

    def add_line_item(self, line_item: LineItem) -> None:
        self.line_items.append(line_item)


@dataclass
class Payment:
    invoice: Invoice
    account: Account
    amount: Decimal
    date: Optional[datetime] = None
    reference: Optional[str] = None
    payment_id: Optional[str] = None
