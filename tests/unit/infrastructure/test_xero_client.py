"""
Tests for the Xero adapter.

The SDK's AccountingApi is replaced with a MagicMock returning real
xero-python models, so mapping is exercised without network access.
"""
from datetime import datetime
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from xero_python.accounting import (
    Account as XeroAccount,
    Accounts,
    Contact as XeroContact,
    Contacts,
    CurrencyCode,
    Invoice as XeroInvoice,
    Invoices,
    LineAmountTypes,
    Payment as XeroPayment,
    Payments,
)

from xerosync.domain.entities import Account, Contact, Invoice, LineItem, Payment
from xerosync.domain.errors import RemoteServiceError
from xerosync.infrastructure.adapters.xero import XeroAccountingClient, XeroMapper
from xerosync.settings import XeroSettings


DUE = datetime(2026, 1, 15, 10, 30)


@pytest.fixture
def accounting_api():
    return MagicMock()


@pytest.fixture
def client(accounting_api):
    settings = XeroSettings(
        _env_file=None,
        client_id="client",
        client_secret="secret",
        tenant_id="tenant-1",
        access_token="token",
    )
    return XeroAccountingClient(settings, accounting_api=accounting_api)


def _invoice(**overrides) -> Invoice:
    values = dict(
        contact=Contact(name="Jane Doe", contact_id="contact-1"),
        invoice_number="ORD-1001",
        currency_code="USD",
        due_date=DUE,
        line_items=[
            LineItem(
                account_code="200",
                description="Mug",
                unit_amount=Decimal("10.00"),
                quantity=Decimal(2),
                discount_rate=Decimal("-25.00"),
                item_code="MUG-1",
            )
        ],
    )
    values.update(overrides)
    return Invoice(**values)


def test_invoice_mapping():
    xero_invoice = XeroMapper.to_xero_invoice(_invoice())

    assert xero_invoice.type == "ACCREC"
    assert xero_invoice.status == "AUTHORISED"
    assert xero_invoice.contact.contact_id == "contact-1"
    assert xero_invoice.line_amount_types == LineAmountTypes.EXCLUSIVE
    assert xero_invoice.currency_code == CurrencyCode.USD
    assert xero_invoice.invoice_number == "ORD-1001"
    assert xero_invoice.sent_to_contact is True
    assert xero_invoice.due_date == DUE.date()

    (line,) = xero_invoice.line_items
    assert line.account_code == "200"
    assert line.quantity == 2.0
    assert line.unit_amount == 10.0
    assert line.discount_rate == -25.0
    assert line.item_code == "MUG-1"


@pytest.mark.asyncio
async def test_find_contact(client, accounting_api):
    accounting_api.get_contacts.return_value = Contacts(
        contacts=[XeroContact(contact_id="c-1", name="Jane Doe", email_address="jane@example.com")]
    )

    contact = await client.find_contact('Name=="Jane Doe"')

    assert contact.contact_id == "c-1"
    assert contact.email_address == "jane@example.com"
    accounting_api.get_contacts.assert_called_once_with("tenant-1", where='Name=="Jane Doe"')


@pytest.mark.asyncio
async def test_find_contact_none(client, accounting_api):
    accounting_api.get_contacts.return_value = Contacts(contacts=[])

    assert await client.find_contact('Name=="Nobody"') is None


@pytest.mark.asyncio
async def test_create_contact(client, accounting_api):
    accounting_api.create_contacts.return_value = Contacts(
        contacts=[XeroContact(contact_id="c-2", name="Jane Doe", first_name="Jane")]
    )

    contact = await client.create_contact(Contact(name="Jane Doe", first_name="Jane"))

    assert contact.contact_id == "c-2"
    sent = accounting_api.create_contacts.call_args.kwargs["contacts"]
    assert sent.contacts[0].name == "Jane Doe"


@pytest.mark.asyncio
async def test_save_invoice_sets_id_and_total(client, accounting_api):
    accounting_api.update_or_create_invoices.return_value = Invoices(
        invoices=[XeroInvoice(invoice_id="inv-1", total=30.02)]
    )
    invoice = _invoice()

    saved = await client.save_invoice(invoice)

    assert saved is invoice
    assert saved.invoice_id == "inv-1"
    assert saved.total == Decimal("30.02")


@pytest.mark.asyncio
async def test_find_account_by_code(client, accounting_api):
    accounting_api.get_accounts.return_value = Accounts(
        accounts=[XeroAccount(account_id="acc-610", code="610", name="Receivable")]
    )

    account = await client.find_account_by_code("610")

    assert account == Account(account_id="acc-610", code="610", name="Receivable")
    accounting_api.get_accounts.assert_called_once_with("tenant-1", where='Code=="610"')


@pytest.mark.asyncio
async def test_find_account_by_code_missing(client, accounting_api):
    accounting_api.get_accounts.return_value = Accounts(accounts=[])

    assert await client.find_account_by_code("999") is None


@pytest.mark.asyncio
async def test_create_payment(client, accounting_api):
    accounting_api.create_payment.return_value = Payments(
        payments=[XeroPayment(payment_id="pay-1")]
    )
    payment = Payment(
        invoice=_invoice(invoice_id="inv-1"),
        account=Account(account_id="acc-610", code="610"),
        amount=Decimal("30.00"),
        date=DUE,
        reference="ch_123",
    )

    saved = await client.create_payment(payment)

    assert saved.payment_id == "pay-1"
    sent = accounting_api.create_payment.call_args.kwargs["payment"]
    assert sent.invoice.invoice_id == "inv-1"
    assert sent.account.account_id == "acc-610"
    assert sent.amount == 30.0
    assert sent.date == DUE.date()
    assert sent.reference == "ch_123"


@pytest.mark.asyncio
async def test_sdk_error_becomes_remote_service_error(client, accounting_api):
    class ServiceUnavailable(Exception):
        status = 503

    accounting_api.get_contacts.side_effect = ServiceUnavailable("try later")

    with pytest.raises(RemoteServiceError) as exc_info:
        await client.find_contact('Name=="Jane Doe"')
    assert exc_info.value.code == 503
    assert "try later" in exc_info.value.message


@pytest.mark.asyncio
async def test_account_code_filter_is_escaped_like_contact_filters(client, accounting_api):
    accounting_api.get_accounts.return_value = Accounts(accounts=[])

    await client.find_account_by_code('6\\1"0')

    accounting_api.get_accounts.assert_called_once_with(
        "tenant-1", where='Code=="6\\\\1\\"0"'
    )
