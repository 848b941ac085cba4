"""Tests for ContactResolver and the contact lookup filter."""

from dataclasses import replace

import pytest

from tests.factories import make_order, make_settings
from tests.mocks.mock_xero_client import MockXeroClient
from xerosync.application.services import ContactResolver, build_contact_filter
from xerosync.domain.entities import Contact, Purchaser
from xerosync.domain.errors import InvalidOrderError, RemoteServiceError
from xerosync.domain.events import ContactCreatedEvent
from xerosync.settings import ContactMatchMode


JANE = Purchaser(name="Jane Doe", email="jane@example.com")


@pytest.mark.parametrize(
    "mode, expected",
    [
        (ContactMatchMode.LEGACY, 'Name=="Jane Doe" OR EmailAddress=="Jane Doe"'),
        (ContactMatchMode.NAME, 'Name=="Jane Doe"'),
        (ContactMatchMode.EMAIL, 'EmailAddress=="jane@example.com"'),
        (ContactMatchMode.NAME_OR_EMAIL, 'Name=="Jane Doe" OR EmailAddress=="jane@example.com"'),
    ],
)
def test_build_contact_filter_modes(mode, expected):
    assert build_contact_filter(JANE, mode) == expected


def test_filter_escapes_quotes():
    purchaser = Purchaser(name='Jane "JD" Doe')
    assert build_contact_filter(purchaser, ContactMatchMode.NAME) == 'Name=="Jane \\"JD\\" Doe"'


def test_email_mode_requires_email():
    with pytest.raises(InvalidOrderError):
        build_contact_filter(Purchaser(name="Jane Doe"), ContactMatchMode.EMAIL)


def test_name_or_email_without_email_matches_name():
    result = build_contact_filter(Purchaser(name="Jane Doe"), ContactMatchMode.NAME_OR_EMAIL)
    assert result == 'Name=="Jane Doe"'


@pytest.mark.asyncio
async def test_resolve_returns_existing_contact(settings):
    existing = Contact(name="Jane Doe", contact_id="contact-existing")
    client = MockXeroClient(contacts=[existing])
    resolver = ContactResolver(client, settings)

    contact = await resolver.resolve(make_order())

    assert contact is existing
    assert client.call_count("create_contact") == 0


@pytest.mark.asyncio
async def test_resolve_creates_contact_with_all_purchaser_fields(settings, event_bus):
    client = MockXeroClient()
    resolver = ContactResolver(client, settings, event_bus)

    contact = await resolver.resolve(make_order())

    assert contact.contact_id == "contact-1"
    assert contact.name == "Jane Doe"
    assert contact.first_name == "Jane"
    assert contact.last_name == "Doe"
    assert contact.email_address == "jane@example.com"

    events = [e for e in event_bus.published if isinstance(e, ContactCreatedEvent)]
    assert len(events) == 1
    assert events[0].contact_id == "contact-1"
    assert events[0].aggregate_id == "1001"


@pytest.mark.asyncio
async def test_legacy_mode_compares_email_to_display_name(settings):
    # A contact whose email happens to equal the display name is matched
    existing = Contact(name="Other", email_address="Jane Doe", contact_id="c-9")
    client = MockXeroClient(contacts=[existing])

    contact = await ContactResolver(client, settings).resolve(make_order())

    assert contact.contact_id == "c-9"


@pytest.mark.asyncio
async def test_email_mode_finds_contact_by_email():
    existing = Contact(name="J. Doe", email_address="jane@example.com", contact_id="c-7")
    client = MockXeroClient(contacts=[existing])
    settings = make_settings(contact_match_mode=ContactMatchMode.EMAIL)

    contact = await ContactResolver(client, settings).resolve(make_order())

    assert contact.contact_id == "c-7"
    assert client.calls["find_contact"] == ['EmailAddress=="jane@example.com"']


@pytest.mark.asyncio
async def test_resolve_without_purchaser_fails(settings):
    client = MockXeroClient()
    order = replace(make_order(), purchaser=None)

    with pytest.raises(InvalidOrderError):
        await ContactResolver(client, settings).resolve(order)
    assert client.call_count("find_contact") == 0


@pytest.mark.asyncio
async def test_lookup_failure_propagates(settings):
    client = MockXeroClient()
    client.fail_on("find_contact")

    with pytest.raises(RemoteServiceError):
        await ContactResolver(client, settings).resolve(make_order())
    assert client.call_count("create_contact") == 0


@pytest.mark.asyncio
async def test_create_failure_propagates(settings):
    client = MockXeroClient()
    client.fail_on("create_contact", RemoteServiceError("Validation failed", code=400))

    with pytest.raises(RemoteServiceError) as exc_info:
        await ContactResolver(client, settings).resolve(make_order())
    assert exc_info.value.code == 400


def test_filter_escapes_backslashes():
    purchaser = Purchaser(name="Jane\\Doe")
    assert build_contact_filter(purchaser, ContactMatchMode.NAME) == 'Name=="Jane\\\\Doe"'
