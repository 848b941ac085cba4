"""
Invoice Submitter.

Owns the idempotency boundary of the pipeline: an invoice is saved
remotely, corrected for rounding drift, and then linked to its order
exactly once. A failed save never leaves a link behind.

There is no duplicate check here. Calling ``submit`` twice for the same
order creates two remote invoices; the second link write then fails with
DuplicateLinkError. Callers check ``SyncOrderUseCase.is_order_invoiced``
first.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, Optional
import logging

from xerosync.application.interfaces import IAccountingClient
from xerosync.application.services.invoice_builder import InvoiceBuilder
from xerosync.data.uow import UnitOfWork
from xerosync.domain.entities import Invoice, InvoiceLink, Order
from xerosync.domain.errors import RemoteServiceError
from xerosync.domain.event_bus import EventBus
from xerosync.domain.events import (
    InvoiceCreatedEvent,
    InvoiceRoundingAdjustedEvent,
    InvoiceSavingEvent,
)
from xerosync.settings import AccountRole, SyncSettings

logger = logging.getLogger(__name__)


@dataclass
class SubmittedInvoice:
    """Outcome of a successful submission."""
    invoice: Invoice
    link: InvoiceLink
    rounding_adjustment: Optional[Decimal] = None


class InvoiceSubmitter:
    """Saves invoices remotely and records the order link."""

    def __init__(
        self,
        accounting_client: IAccountingClient,
        builder: InvoiceBuilder,
        uow_factory: Callable[[], UnitOfWork],
        settings: SyncSettings,
        event_bus: Optional[EventBus] = None,
    ):
        self.accounting_client = accounting_client
        self.builder = builder
        self.uow_factory = uow_factory
        self.settings = settings
        self.event_bus = event_bus

    async def submit(self, invoice: Invoice, order: Order) -> SubmittedInvoice:
        """
        Save ``invoice`` for ``order`` and record the link.

        Steps:
        1. Check the rounding account code is configured
        2. Save the invoice (Xero assigns id and total)
        3. If Xero's total drifted from the order total, append one
           rounding line and save once more
        4. Persist the order -> invoice link

        Raises:
            RemoteServiceError: If a save fails (no link is written)
            ConfigurationError: If the rounding account code is missing
                (raised before anything is sent)
            DuplicateLinkError / LinkPersistenceError: If the link write fails
        """
        # Resolved before the first save; the rounding line is only built after it
        self.settings.account_code(AccountRole.ROUNDING)

        await self._publish(
            InvoiceSavingEvent(
                order_id=order.id,
                invoice_number=invoice.invoice_number,
                lines_count=len(invoice.line_items),
            )
        )

        invoice = await self.accounting_client.save_invoice(invoice)
        self._check_saved(invoice)
        logger.info(
            f"Saved invoice {invoice.invoice_id} for order {order.id} "
            f"(total={invoice.total})"
        )

        rounding_adjustment = self._correct_rounding(invoice, order)
        if rounding_adjustment is not None:
            invoice = await self.accounting_client.save_invoice(invoice)
            self._check_saved(invoice)
            logger.info(
                f"Re-saved invoice {invoice.invoice_id} with rounding "
                f"adjustment {rounding_adjustment} (total={invoice.total})"
            )
            await self._publish(
                InvoiceRoundingAdjustedEvent(
                    order_id=order.id,
                    invoice_id=invoice.invoice_id,
                    order_total=self.builder.order_total(order),
                    remote_total=invoice.total,
                    adjustment=rounding_adjustment,
                )
            )

        link = await self._record_link(order.id, invoice.invoice_id)

        await self._publish(
            InvoiceCreatedEvent(
                order_id=order.id,
                invoice_id=invoice.invoice_id,
                invoice_number=invoice.invoice_number,
                total=invoice.total,
                lines_count=len(invoice.line_items),
            )
        )

        return SubmittedInvoice(
            invoice=invoice,
            link=link,
            rounding_adjustment=rounding_adjustment,
        )

    def _correct_rounding(self, invoice: Invoice, order: Order) -> Optional[Decimal]:
        """
        Append a rounding line when Xero's total differs from the order total.

        Only an overshoot is corrected unless ``correct_rounding_undershoot``
        is enabled.

        Returns:
            The adjustment amount, or None if no line was added
        """
        order_total = self.builder.order_total(order)
        remote_total = invoice.total

        overshoot = remote_total > order_total
        undershoot = remote_total < order_total and self.settings.correct_rounding_undershoot
        if not (overshoot or undershoot):
            return None

        line_item = self.builder.build_rounding_line(order_total, remote_total)
        invoice.add_line_item(line_item)
        logger.info(
            f"Invoice {invoice.invoice_id} total {remote_total} differs from "
            f"order total {order_total}; adding rounding line {line_item.unit_amount}"
        )
        return line_item.unit_amount

    async def _record_link(self, order_id: str, invoice_id: str) -> InvoiceLink:
        async with self.uow_factory() as uow:
            link = await uow.invoice_links.create(order_id, invoice_id)
            await uow.commit()
        logger.info(f"Linked order {order_id} -> invoice {invoice_id}")
        return link

    @staticmethod
    def _check_saved(invoice: Invoice) -> None:
        if not invoice.invoice_id or invoice.total is None:
            raise RemoteServiceError(
                f"Invoice {invoice.invoice_number} was not assigned an id/total"
            )

    async def _publish(self, event) -> None:
        if self.event_bus is not None:
            await self.event_bus.publish(event)
