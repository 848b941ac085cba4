"""
Sync Order Use Case.

This is the CORE workflow for sending a commerce order to Xero.

Flow:
1. Skip orders that already have an invoice link (per-order lock held)
2. Find or create the Contact
3. Build the Invoice, save it, correct rounding, link it to the order
4. Record a Payment if the order is paid and payments are enabled
5. Return a response describing what happened

Any stage failure stops the pipeline. Nothing is retried. Errors never
propagate to the caller; they come back on the response.
"""
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, AsyncIterator, Callable, Dict, Optional
import asyncio
import logging

from xerosync.application.interfaces import IAccountingClient
from xerosync.application.services import (
    ContactResolver,
    InvoiceBuilder,
    InvoiceSubmitter,
    PaymentRecorder,
)
from xerosync.data.uow import UnitOfWork
from xerosync.domain.entities import InvoiceLink, Order
from xerosync.domain.errors import SyncError
from xerosync.domain.event_bus import EventBus
from xerosync.domain.events import OrderSyncedEvent, OrderSyncFailedEvent
from xerosync.domain.value_objects import ExecutionID
from xerosync.settings import SyncSettings


logger = logging.getLogger(__name__)


STAGE_GUARD = "guard"
STAGE_CONTACT = "contact"
STAGE_INVOICE = "invoice"
STAGE_PAYMENT = "payment"


# =============================================================================
# RESPONSE (Application Layer)
# =============================================================================

@dataclass
class SyncErrorDetail:
    """Structured description of why a stage failed."""
    kind: str
    message: str
    code: Optional[Any] = None

    @classmethod
    def from_exception(cls, error: Exception) -> "SyncErrorDetail":
        if isinstance(error, SyncError):
            return cls(kind=error.kind, message=error.message, code=error.code)
        return cls(kind="unexpected", message=str(error))


@dataclass
class SyncOrderResponse:
    """
    Output from sync order use case.

    ``success`` is True once the Contact and Invoice stages succeeded; a
    payment failure is reported in ``payment_error`` without changing it.
    """
    execution_id: ExecutionID
    order_id: str
    success: bool
    already_invoiced: bool = False

    # Xero data
    contact_id: Optional[str] = None
    invoice_id: Optional[str] = None
    invoice_total: Optional[Decimal] = None
    rounding_adjustment: Optional[Decimal] = None
    payment_id: Optional[str] = None

    # Error data
    failed_stage: Optional[str] = None
    error: Optional[SyncErrorDetail] = None
    payment_error: Optional[SyncErrorDetail] = None

    # Metadata
    timestamp: datetime = field(default_factory=datetime.utcnow)


# =============================================================================
# USE CASE
# =============================================================================

class SyncOrderUseCase:
    """
    Use case for sending a commerce order to Xero.

    CRITICAL: This handles money - every step is logged with the
    execution id so a sync can be traced end to end.
    """

    def __init__(
        self,
        accounting_client: IAccountingClient,
        uow_factory: Callable[[], UnitOfWork],
        settings: SyncSettings,
        event_bus: Optional[EventBus] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize use case with dependencies.

        Args:
            accounting_client: Client for the Xero API
            uow_factory: Creates a Unit of Work for invoice link access
            settings: Account codes and feature flags
            event_bus: Optional bus for lifecycle events
            clock: Optional clock used for the invoice due date
        """
        self.accounting_client = accounting_client
        self.uow_factory = uow_factory
        self.settings = settings
        self.event_bus = event_bus

        self.contact_resolver = ContactResolver(accounting_client, settings, event_bus)
        self.invoice_builder = InvoiceBuilder(settings, clock=clock)
        self.invoice_submitter = InvoiceSubmitter(
            accounting_client, self.invoice_builder, uow_factory, settings, event_bus
        )
        self.payment_recorder = PaymentRecorder(accounting_client, settings, event_bus)

        self._locks: Dict[str, asyncio.Lock] = {}
        self._lock_users: Dict[str, int] = {}

    async def sync_order(self, order: Order) -> bool:
        """Send ``order`` to Xero and report only whether it succeeded."""
        response = await self.execute(order)
        return response.success

    async def is_order_invoiced(self, order_id: str) -> bool:
        """Return True if ``order_id`` already has an invoice link."""
        return await self.get_invoice_link(order_id) is not None

    async def get_invoice_link(self, order_id: str) -> Optional[InvoiceLink]:
        async with self.uow_factory() as uow:
            return await uow.invoice_links.find_by_order_id(order_id)

    async def execute(self, order: Order) -> SyncOrderResponse:
        """
        Execute the sync workflow.

        Args:
            order: Commerce order to send

        Returns:
            Response with sync results

        Raises:
            No exceptions - all errors are caught and returned in response
        """
        execution_id = ExecutionID.generate()
        logger.info(f"[{execution_id}] Starting order sync: {order.id} ({order.reference})")

        async with self._order_lock(order.id):
            return await self._run(order, execution_id)

    async def _run(self, order: Order, execution_id: ExecutionID) -> SyncOrderResponse:
        # ================================================================
        # STEP 1: Idempotency guard
        # ================================================================
        if self.settings.skip_invoiced_orders:
            try:
                link = await self.get_invoice_link(order.id)
            except Exception as e:
                return await self._fail(order, execution_id, STAGE_GUARD, e)

            if link is not None:
                logger.info(
                    f"[{execution_id}] Order {order.id} already invoiced as "
                    f"{link.invoice_id}, skipping"
                )
                return SyncOrderResponse(
                    execution_id=execution_id,
                    order_id=order.id,
                    success=True,
                    already_invoiced=True,
                    invoice_id=link.invoice_id,
                )

        # ================================================================
        # STEP 2: Resolve Contact
        # ================================================================
        logger.info(f"[{execution_id}] Step 2: Resolving contact")
        try:
            contact = await self.contact_resolver.resolve(order)
        except Exception as e:
            return await self._fail(order, execution_id, STAGE_CONTACT, e)

        # ================================================================
        # STEP 3: Build, submit and link Invoice
        # ================================================================
        logger.info(f"[{execution_id}] Step 3: Creating invoice")
        try:
            invoice = self.invoice_builder.build(contact, order)
            submitted = await self.invoice_submitter.submit(invoice, order)
        except Exception as e:
            return await self._fail(order, execution_id, STAGE_INVOICE, e)

        invoice = submitted.invoice
        logger.info(
            f"[{execution_id}] ✅ Invoice {invoice.invoice_id} created "
            f"(total={invoice.total})"
        )

        response = SyncOrderResponse(
            execution_id=execution_id,
            order_id=order.id,
            success=True,
            contact_id=contact.contact_id,
            invoice_id=invoice.invoice_id,
            invoice_total=invoice.total,
            rounding_adjustment=submitted.rounding_adjustment,
        )

        # ================================================================
        # STEP 4: Record Payment (paid orders only)
        # ================================================================
        if self.payment_recorder.should_record(order):
            logger.info(f"[{execution_id}] Step 4: Recording payment")
            try:
                account = await self.payment_recorder.get_receivable_account()
                payment = await self.payment_recorder.record(invoice, account, order)
                response.payment_id = payment.payment_id
            except Exception as e:
                # The invoice stands; a missing payment is reported, not fatal
                response.payment_error = SyncErrorDetail.from_exception(e)
                logger.error(
                    f"[{execution_id}] ❌ Payment failed: "
                    f"{response.payment_error.message} (code={response.payment_error.code})",
                    exc_info=not isinstance(e, SyncError),
                )
        else:
            logger.info(f"[{execution_id}] Skipping payment (unpaid or disabled)")

        await self._publish(
            OrderSyncedEvent(
                order_id=order.id,
                execution_id=str(execution_id),
                invoice_id=response.invoice_id,
                payment_id=response.payment_id,
            )
        )
        logger.info(f"[{execution_id}] ✅ Order sync completed successfully")
        return response

    async def _fail(
        self,
        order: Order,
        execution_id: ExecutionID,
        stage: str,
        error: Exception,
    ) -> SyncOrderResponse:
        detail = SyncErrorDetail.from_exception(error)
        logger.error(
            f"[{execution_id}] ❌ Sync failed at {stage}: {detail.message} "
            f"(code={detail.code})",
            exc_info=not isinstance(error, SyncError),
        )
        await self._publish(
            OrderSyncFailedEvent(
                order_id=order.id,
                execution_id=str(execution_id),
                stage=stage,
                error_kind=detail.kind,
                error_message=detail.message,
            )
        )
        return SyncOrderResponse(
            execution_id=execution_id,
            order_id=order.id,
            success=False,
            failed_stage=stage,
            error=detail,
        )

    async def _publish(self, event) -> None:
        if self.event_bus is None:
            return
        try:
            await self.event_bus.publish(event)
        except Exception as e:
            logger.warning(f"Failed to publish {event.event_type} (non-critical): {e}")

    @asynccontextmanager
    async def _order_lock(self, order_id: str) -> AsyncIterator[None]:
        """Serialize concurrent syncs of the same order within this process."""
        lock = self._locks.setdefault(order_id, asyncio.Lock())
        self._lock_users[order_id] = self._lock_users.get(order_id, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._lock_users[order_id] -= 1
            if not self._lock_users[order_id]:
                del self._lock_users[order_id]
                del self._locks[order_id]
