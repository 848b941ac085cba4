"""
Contact Resolver.

Finds the Xero Contact for an order's purchaser, creating one when no
existing Contact matches.
"""
from typing import Optional
import logging

from xerosync.application.interfaces import IAccountingClient, equals
from xerosync.domain.entities import Contact, Order, Purchaser
from xerosync.domain.errors import InvalidOrderError
from xerosync.domain.event_bus import EventBus
from xerosync.domain.events import ContactCreatedEvent
from xerosync.settings import ContactMatchMode, SyncSettings

logger = logging.getLogger(__name__)


def build_contact_filter(purchaser: Purchaser, mode: ContactMatchMode) -> str:
    """
    Build the Xero ``where`` filter used to look up the purchaser.

    Example:
        >>> build_contact_filter(Purchaser(name="Jane"), ContactMatchMode.LEGACY)
        'Name=="Jane" OR EmailAddress=="Jane"'
    """
    by_name = equals("Name", purchaser.name)

    if mode == ContactMatchMode.LEGACY:
        return f"{by_name} OR {equals('EmailAddress', purchaser.name)}"
    if mode == ContactMatchMode.NAME:
        return by_name

    if not purchaser.email:
        if mode == ContactMatchMode.EMAIL:
            raise InvalidOrderError(
                "Purchaser has no email address to match on", code="purchaser_email"
            )
        # name_or_email degrades to name only
        return by_name

    by_email = equals("EmailAddress", purchaser.email)
    if mode == ContactMatchMode.EMAIL:
        return by_email
    return f"{by_name} OR {by_email}"


class ContactResolver:
    """Find-or-create of the purchaser's Contact."""

    def __init__(
        self,
        accounting_client: IAccountingClient,
        settings: SyncSettings,
        event_bus: Optional[EventBus] = None,
    ):
        self.accounting_client = accounting_client
        self.settings = settings
        self.event_bus = event_bus

    async def resolve(self, order: Order) -> Contact:
        """
        Return the existing or newly created Contact for ``order``.

        Raises:
            InvalidOrderError: If the order has no purchaser
            RemoteServiceError: If the lookup or the creation fails
        """
        purchaser = order.purchaser
        if purchaser is None or not purchaser.name:
            raise InvalidOrderError(
                f"Order {order.id} has no purchaser", code="purchaser"
            )

        where = build_contact_filter(purchaser, self.settings.contact_match_mode)
        contact = await self.accounting_client.find_contact(where)
        if contact is not None:
            logger.info(f"Found contact {contact.contact_id} for order {order.id}")
            return contact

        contact = await self.accounting_client.create_contact(
            Contact(
                name=purchaser.name,
                first_name=purchaser.first_name,
                last_name=purchaser.last_name,
                email_address=purchaser.email,
            )
        )
        logger.info(f"Created contact {contact.contact_id} for order {order.id}")

        if self.event_bus is not None:
            await self.event_bus.publish(
                ContactCreatedEvent(
                    order_id=order.id,
                    contact_id=contact.contact_id,
                    name=contact.name,
                )
            )
        return contact
