"""
Invoice Builder - converts a commerce Order into a Xero Invoice draft.

Line structure:
    - One line per order line item (sales account)
    - One line per shipping / discount / other adjustment
    - Tax adjustments are never itemized: lines are tax-exclusive and Xero
      computes tax itself
    - Optional rounding line, built after the first save (see InvoiceSubmitter)
"""
from datetime import datetime
from decimal import Decimal
from typing import Callable, Optional
import logging

from xerosync.domain.entities import (
    AdjustmentType,
    Contact,
    Invoice,
    InvoiceStatus,
    InvoiceType,
    LineItem,
    Order,
    OrderAdjustment,
    OrderLineItem,
)
from xerosync.domain.value_objects import normalize
from xerosync.settings import AccountRole, SyncSettings

logger = logging.getLogger(__name__)


class InvoiceBuilder:
    """
    Maps an Order to Invoice line items and header.

    Usage:
        builder = InvoiceBuilder(settings)
        invoice = builder.build(contact, order)
    """

    def __init__(
        self,
        settings: SyncSettings,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.settings = settings
        self._clock = clock or datetime.utcnow

    def _normalize(self, value) -> Decimal:
        return normalize(value, self.settings.decimals)

    def build(self, contact: Contact, order: Order) -> Invoice:
        """
        Build the invoice draft for ``order``.

        Raises:
            ConfigurationError: If an account code needed by a line is missing
        """
        invoice = Invoice(
            contact=contact,
            invoice_number=order.reference,
            currency_code=order.currency,
            due_date=self._clock(),
            status=InvoiceStatus.AUTHORISED,
            type=InvoiceType.ACCREC,
            line_amount_type=self.settings.line_amount_type,
            sent_to_contact=True,
        )

        for order_item in order.line_items:
            invoice.add_line_item(self.build_item_line(order_item))

        for adjustment in order.adjustments:
            line_item = self.build_adjustment_line(adjustment, order)
            if line_item is not None:
                invoice.add_line_item(line_item)

        logger.info(
            f"Built invoice {invoice.invoice_number} with "
            f"{len(invoice.line_items)} line(s)"
        )
        return invoice

    def build_item_line(self, order_item: OrderLineItem) -> LineItem:
        """Build the sales line for a single order line item."""
        line_item = LineItem(
            account_code=self.settings.account_code(AccountRole.SALES),
            description=order_item.description,
            quantity=Decimal(order_item.quantity),
            unit_amount=self._normalize(order_item.effective_price),
        )

        subtotal = order_item.line_subtotal
        if order_item.discount > 0 and subtotal > 0:
            line_item.discount_rate = self._normalize(
                Decimal(-100) * order_item.discount / subtotal
            )

        if self.settings.update_inventory:
            line_item.item_code = order_item.sku

        return line_item

    def build_adjustment_line(
        self,
        adjustment: OrderAdjustment,
        order: Order,
    ) -> Optional[LineItem]:
        """
        Build the line for an order adjustment.

        Returns:
            LineItem, or None for tax adjustments
        """
        if adjustment.is_type(AdjustmentType.TAX):
            return None

        if adjustment.is_type(AdjustmentType.SHIPPING):
            # Shipping is billed from the order's shipping total, not the
            # adjustment amount
            role = AccountRole.SHIPPING
            amount = order.total_shipping_cost
        elif adjustment.is_type(AdjustmentType.DISCOUNT):
            role = AccountRole.DISCOUNT
            amount = adjustment.amount
        else:
            role = AccountRole.ADDITIONAL_FEES
            amount = adjustment.amount

        return LineItem(
            account_code=self.settings.account_code(role),
            description=adjustment.name,
            quantity=Decimal(1),
            unit_amount=self._normalize(amount),
        )

    def build_rounding_line(
        self,
        order_total: Decimal,
        invoice_total: Decimal,
    ) -> LineItem:
        """
        Build the line that brings ``invoice_total`` back to ``order_total``.

        Negative when Xero's total overshoots the order total.
        """
        return LineItem(
            account_code=self.settings.account_code(AccountRole.ROUNDING),
            description=f"Rounding adjustment: Order Total: {order_total}",
            quantity=Decimal(1),
            unit_amount=self._normalize(order_total - invoice_total),
        )

    def order_total(self, order: Order) -> Decimal:
        return self._normalize(order.total_price)

