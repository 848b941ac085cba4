"""Payment Recorder - records a Xero Payment for a paid order."""
from typing import Optional
import logging

from xerosync.application.interfaces import IAccountingClient
from xerosync.domain.entities import Account, Invoice, Order, Payment
from xerosync.domain.errors import NotFoundError
from xerosync.domain.event_bus import EventBus
from xerosync.domain.events import PaymentRecordedEvent
from xerosync.domain.value_objects import normalize
from xerosync.settings import AccountRole, SyncSettings

logger = logging.getLogger(__name__)


class PaymentRecorder:
    """Creates a Payment against an invoice for the order's paid amount."""

    def __init__(
        self,
        accounting_client: IAccountingClient,
        settings: SyncSettings,
        event_bus: Optional[EventBus] = None,
    ):
        self.accounting_client = accounting_client
        self.settings = settings
        self.event_bus = event_bus

    def should_record(self, order: Order) -> bool:
        """Payments are recorded only for paid orders with the feature enabled."""
        return bool(order.is_paid and self.settings.create_payments)

    async def get_receivable_account(self) -> Account:
        """
        Resolve the accounts receivable Account.

        Raises:
            ConfigurationError: If no receivable code is configured
            NotFoundError: If Xero has no account with that code
            RemoteServiceError: If the lookup fails
        """
        code = self.settings.account_code(AccountRole.RECEIVABLE)
        account = await self.accounting_client.find_account_by_code(code)
        if account is None:
            raise NotFoundError(f"No Xero account with code {code}", code=code)
        return account

    async def record(self, invoice: Invoice, account: Account, order: Order) -> Payment:
        """
        Save a Payment for ``order`` against ``invoice``.

        Raises:
            RemoteServiceError: If the payment cannot be saved
        """
        payment = await self.accounting_client.create_payment(
            Payment(
                invoice=invoice,
                account=account,
                amount=normalize(order.total_paid, self.settings.decimals),
                date=order.date_paid,
                reference=order.last_transaction_reference,
            )
        )
        logger.info(
            f"Recorded payment {payment.payment_id} of {payment.amount} "
            f"on invoice {invoice.invoice_id}"
        )

        if self.event_bus is not None:
            await self.event_bus.publish(
                PaymentRecordedEvent(
                    order_id=order.id,
                    invoice_id=invoice.invoice_id,
                    payment_id=payment.payment_id,
                    amount=payment.amount,
                )
            )
        return payment
