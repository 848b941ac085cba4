"""
Commerce order model (read-only view).

The pipeline never mutates an order; it only reads totals, items and
adjustments from it.

CRITICAL: This file must contain ZERO imports from:
- sqlalchemy
- pydantic
- fastapi
"""
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import List, Optional


class AdjustmentType(str, Enum):
    """Adjustment kinds the commerce platform emits."""
    SHIPPING = "shipping"
    DISCOUNT = "discount"
    TAX = "tax"


@dataclass(frozen=True)
class Purchaser:
    """Customer who placed the order."""
    name: str
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None


@dataclass(frozen=True)
class OrderLineItem:
    """
    Single purchasable row on an order.

    ``subtotal`` is the pre-discount line value. When the platform does not
    report it, it is derived from the effective unit price and quantity.
    """
    description: str
    quantity: int
    price: Decimal
    sale_price: Decimal = Decimal("0")
    discount: Decimal = Decimal("0")
    sku: Optional[str] = None
    subtotal: Optional[Decimal] = None

    @property
    def effective_price(self) -> Decimal:
        return self.sale_price if self.sale_price > 0 else self.price

    @property
    def line_subtotal(self) -> Decimal:
        if self.subtotal is not None:
            return self.subtotal
        return self.effective_price * self.quantity


@dataclass(frozen=True)
class OrderAdjustment:
    """
    Non-line-item modifier to the order total.

    ``type`` is kept as a plain string: anything that is not shipping,
    discount or tax is billed as an additional fee.
    """
    type: str
    name: str
    amount: Decimal

    def is_type(self, adjustment_type: AdjustmentType) -> bool:
        return self.type == adjustment_type.value


@dataclass(frozen=True)
class Order:
    """Commerce order as seen by the sync pipeline."""
    id: str
    reference: str
    currency: str
    total_price: Decimal
    purchaser: Optional[Purchaser] = None
    line_items: List[OrderLineItem] = field(default_factory=list)
    adjustments: List[OrderAdjustment] = field(default_factory=list)
    total_paid: Decimal = Decimal("0")
    total_shipping_cost: Decimal = Decimal("0")
    is_paid: bool = False
    date_paid: Optional[datetime] = None
    last_transaction_reference: Optional[str] = None

    def __post_init__(self):
        if not self.id:
            raise ValueError("Order id cannot be empty")
        if not isinstance(self.currency, str) or len(self.currency) != 3:
            raise ValueError(
                f"Currency must be 3-letter ISO code, got: {self.currency}"
            )
