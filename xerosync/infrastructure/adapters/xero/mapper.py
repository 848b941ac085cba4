"""
Xero Mapper - converts domain accounting entities to and from xero-python models.

Amounts cross the boundary as floats (the SDK's type) and come back as
Decimal via ``str`` so no binary artefacts reach the pipeline.
"""
from decimal import Decimal
from typing import Optional

from xero_python.accounting import (
    Account as XeroAccount,
    Contact as XeroContact,
    CurrencyCode,
    Invoice as XeroInvoice,
    LineAmountTypes,
    LineItem as XeroLineItem,
    Payment as XeroPayment,
)

from xerosync.domain.entities import Account, Contact, Invoice, LineItem, Payment


def _to_decimal(value) -> Optional[Decimal]:
    if value is None:
        return None
    return Decimal(str(value))


def _to_float(value: Optional[Decimal]) -> Optional[float]:
    if value is None:
        return None
    return float(value)


class XeroMapper:
    """Static conversions between domain entities and SDK models."""

    # ------------------------------------------------------------------
    # Contacts
    # ------------------------------------------------------------------

    @staticmethod
    def to_xero_contact(contact: Contact) -> XeroContact:
        return XeroContact(
            contact_id=contact.contact_id,
            name=contact.name,
            first_name=contact.first_name,
            last_name=contact.last_name,
            email_address=contact.email_address,
        )

    @staticmethod
    def from_xero_contact(xero_contact: XeroContact) -> Contact:
        return Contact(
            contact_id=str(xero_contact.contact_id) if xero_contact.contact_id else None,
            name=xero_contact.name,
            first_name=xero_contact.first_name,
            last_name=xero_contact.last_name,
            email_address=xero_contact.email_address,
        )

    # ------------------------------------------------------------------
    # Invoices
    # ------------------------------------------------------------------

    @staticmethod
    def to_xero_line_item(line_item: LineItem) -> XeroLineItem:
        return XeroLineItem(
            account_code=line_item.account_code,
            description=line_item.description,
            quantity=_to_float(line_item.quantity),
            unit_amount=_to_float(line_item.unit_amount),
            discount_rate=_to_float(line_item.discount_rate),
            item_code=line_item.item_code,
        )

    @staticmethod
    def to_xero_invoice(invoice: Invoice) -> XeroInvoice:
        """
        Build the SDK invoice payload.

        Example payload (JSON form):
            {
                "Type": "ACCREC",
                "Status": "AUTHORISED",
                "Contact": {"ContactID": "..."},
                "LineAmountTypes": "Exclusive",
                "CurrencyCode": "USD",
                "InvoiceNumber": "ORD-1001",
                "SentToContact": true,
                "DueDate": "2026-01-15",
                "LineItems": [...]
            }
        """
        contact = XeroContact(contact_id=invoice.contact.contact_id)
        return XeroInvoice(
            invoice_id=invoice.invoice_id,
            type=invoice.type.value,
            status=invoice.status.value,
            contact=contact,
            line_amount_types=LineAmountTypes(invoice.line_amount_type.value),
            currency_code=CurrencyCode(invoice.currency_code),
            invoice_number=invoice.invoice_number,
            sent_to_contact=invoice.sent_to_contact,
            due_date=invoice.due_date.date(),
            line_items=[
                XeroMapper.to_xero_line_item(line_item)
                for line_item in invoice.line_items
            ],
        )

    @staticmethod
    def apply_saved_invoice(invoice: Invoice, xero_invoice: XeroInvoice) -> Invoice:
        """Copy the remote-assigned id and total onto the domain invoice."""
        invoice.invoice_id = str(xero_invoice.invoice_id) if xero_invoice.invoice_id else None
        invoice.total = _to_decimal(xero_invoice.total)
        return invoice

    # ------------------------------------------------------------------
    # Accounts & payments
    # ------------------------------------------------------------------

    @staticmethod
    def from_xero_account(xero_account: XeroAccount) -> Account:
        return Account(
            account_id=str(xero_account.account_id),
            code=xero_account.code,
            name=xero_account.name,
        )

    @staticmethod
    def to_xero_payment(payment: Payment) -> XeroPayment:
        return XeroPayment(
            invoice=XeroInvoice(invoice_id=payment.invoice.invoice_id),
            account=XeroAccount(account_id=payment.account.account_id),
            amount=_to_float(payment.amount),
            date=payment.date.date() if payment.date else None,
            reference=payment.reference,
        )

    @staticmethod
    def apply_saved_payment(payment: Payment, xero_payment: XeroPayment) -> Payment:
        payment.payment_id = str(xero_payment.payment_id) if xero_payment.payment_id else None
        return payment
