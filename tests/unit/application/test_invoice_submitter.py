"""Tests for InvoiceSubmitter: save, rounding correction and link write."""

from decimal import Decimal

import pytest

from tests.factories import make_order, make_settings
from tests.mocks.mock_xero_client import MockXeroClient
from xerosync.application.services import InvoiceBuilder, InvoiceSubmitter
from xerosync.domain.entities import Contact
from xerosync.domain.errors import ConfigurationError, DuplicateLinkError, RemoteServiceError
from xerosync.domain.events import (
    InvoiceCreatedEvent,
    InvoiceRoundingAdjustedEvent,
    InvoiceSavingEvent,
)


CONTACT = Contact(name="Jane Doe", contact_id="contact-1")


def _submitter(client, uow_factory, settings, clock, event_bus=None):
    builder = InvoiceBuilder(settings, clock=clock)
    return builder, InvoiceSubmitter(client, builder, uow_factory, settings, event_bus)


async def _find_link(uow_factory, order_id):
    async with uow_factory() as uow:
        return await uow.invoice_links.find_by_order_id(order_id)


@pytest.mark.asyncio
async def test_submit_without_drift_saves_once(uow_factory, settings, clock, event_bus):
    client = MockXeroClient(invoice_totals=["30.00"])
    builder, submitter = _submitter(client, uow_factory, settings, clock, event_bus)
    order = make_order()

    result = await submitter.submit(builder.build(CONTACT, order), order)

    assert client.save_count == 1
    assert result.rounding_adjustment is None
    assert result.invoice.invoice_id == "invoice-1"
    assert len(result.invoice.line_items) == 3
    assert result.link.invoice_id == "invoice-1"

    link = await _find_link(uow_factory, "1001")
    assert link.invoice_id == "invoice-1"

    event_types = [e.event_type for e in event_bus.published]
    assert event_types == ["InvoiceSavingEvent", "InvoiceCreatedEvent"]


@pytest.mark.asyncio
async def test_overshoot_adds_rounding_line_and_resaves_once(uow_factory, settings, clock, event_bus):
    client = MockXeroClient(invoice_totals=["30.02", "30.00"])
    builder, submitter = _submitter(client, uow_factory, settings, clock, event_bus)
    order = make_order()

    result = await submitter.submit(builder.build(CONTACT, order), order)

    assert client.save_count == 2
    assert result.rounding_adjustment == Decimal("-0.02")
    assert result.invoice.total == Decimal("30.00")

    # Second save carries the extra line, same invoice id
    first, second = client.saved_invoices
    assert len(first.line_items) == 3
    assert len(second.line_items) == 4
    assert second.invoice_id == "invoice-1"
    rounding = second.line_items[-1]
    assert rounding.account_code == "860"
    assert rounding.unit_amount == Decimal("-0.02")

    adjusted = [e for e in event_bus.published if isinstance(e, InvoiceRoundingAdjustedEvent)]
    assert len(adjusted) == 1
    assert adjusted[0].adjustment == Decimal("-0.02")
    assert adjusted[0].remote_total == Decimal("30.00")


@pytest.mark.asyncio
async def test_undershoot_is_left_alone_by_default(uow_factory, settings, clock):
    client = MockXeroClient(invoice_totals=["29.99"])
    builder, submitter = _submitter(client, uow_factory, settings, clock)
    order = make_order()

    result = await submitter.submit(builder.build(CONTACT, order), order)

    assert client.save_count == 1
    assert result.rounding_adjustment is None
    assert result.invoice.total == Decimal("29.99")


@pytest.mark.asyncio
async def test_undershoot_corrected_when_enabled(uow_factory, clock):
    settings = make_settings(correct_rounding_undershoot=True)
    client = MockXeroClient(invoice_totals=["29.99", "30.00"])
    builder, submitter = _submitter(client, uow_factory, settings, clock)
    order = make_order()

    result = await submitter.submit(builder.build(CONTACT, order), order)

    assert client.save_count == 2
    assert result.rounding_adjustment == Decimal("0.01")


@pytest.mark.asyncio
async def test_failed_save_writes_no_link(uow_factory, settings, clock, event_bus):
    client = MockXeroClient()
    client.fail_on("save_invoice")
    builder, submitter = _submitter(client, uow_factory, settings, clock, event_bus)
    order = make_order()

    with pytest.raises(RemoteServiceError):
        await submitter.submit(builder.build(CONTACT, order), order)

    assert await _find_link(uow_factory, "1001") is None
    assert not [e for e in event_bus.published if isinstance(e, InvoiceCreatedEvent)]
    assert [e for e in event_bus.published if isinstance(e, InvoiceSavingEvent)]


@pytest.mark.asyncio
async def test_save_without_id_is_rejected(uow_factory, settings, clock):
    class NoIdClient(MockXeroClient):
        async def save_invoice(self, invoice):
            invoice.total = None
            return invoice

    builder, submitter = _submitter(NoIdClient(), uow_factory, settings, clock)
    order = make_order()

    with pytest.raises(RemoteServiceError):
        await submitter.submit(builder.build(CONTACT, order), order)
    assert await _find_link(uow_factory, "1001") is None


@pytest.mark.asyncio
async def test_second_submit_for_same_order_fails_on_link(uow_factory, settings, clock):
    client = MockXeroClient()
    builder, submitter = _submitter(client, uow_factory, settings, clock)
    order = make_order()

    await submitter.submit(builder.build(CONTACT, order), order)
    with pytest.raises(DuplicateLinkError):
        await submitter.submit(builder.build(CONTACT, order), order)

    # Remote side got two invoices, the link still points at the first
    assert len(client.invoices) == 2
    link = await _find_link(uow_factory, "1001")
    assert link.invoice_id == "invoice-1"


@pytest.mark.asyncio
async def test_missing_rounding_code_fails_before_any_save(uow_factory, clock, event_bus):
    settings = make_settings(account_rounding=None)
    client = MockXeroClient(invoice_totals=["30.02", "30.00"])
    builder, submitter = _submitter(client, uow_factory, settings, clock, event_bus)
    order = make_order()

    with pytest.raises(ConfigurationError) as exc_info:
        await submitter.submit(builder.build(CONTACT, order), order)

    assert exc_info.value.code == "account_rounding"
    assert client.save_count == 0
    assert client.invoices == {}
    assert event_bus.published == []
    assert await _find_link(uow_factory, "1001") is None
