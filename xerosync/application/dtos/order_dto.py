"""
DTOs for the order sync API.

The commerce platform posts its order as JSON; these models validate it
and convert it to the domain Order.
"""
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from xerosync.domain.entities import Order, OrderAdjustment, OrderLineItem, Purchaser


class PurchaserDTO(BaseModel):
    name: str = Field(..., min_length=1, description="Display name (full name or username)")
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None


class OrderLineItemDTO(BaseModel):
    description: str
    quantity: int = Field(..., ge=0)
    price: Decimal
    sale_price: Decimal = Decimal("0")
    discount: Decimal = Decimal("0")
    subtotal: Optional[Decimal] = None
    sku: Optional[str] = None


class OrderAdjustmentDTO(BaseModel):
    type: str = Field(..., description="shipping, discount, tax or any other fee type")
    name: str
    amount: Decimal


class OrderDTO(BaseModel):
    """Order payload for ``POST /orders/sync``."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "1001",
                "reference": "ORD-1001",
                "currency": "USD",
                "purchaser": {
                    "name": "Jane Doe",
                    "email": "jane@example.com",
                    "first_name": "Jane",
                    "last_name": "Doe",
                },
                "line_items": [
                    {"description": "Mug", "quantity": 2, "price": "10.00", "sku": "MUG-1"},
                    {"description": "Coaster", "quantity": 1, "price": "5.00", "sku": "CST-1"},
                ],
                "adjustments": [
                    {"type": "shipping", "name": "Standard shipping", "amount": "5.00"}
                ],
                "total_price": "30.00",
                "total_paid": "30.00",
                "total_shipping_cost": "5.00",
                "is_paid": True,
                "date_paid": "2026-01-15T10:30:00Z",
                "last_transaction_reference": "ch_123",
            }
        }
    )

    id: str = Field(..., min_length=1, description="Commerce order id")
    reference: str = Field(..., min_length=1, description="Human-readable order reference")
    currency: str = Field(..., description="Payment currency (ISO 4217)")
    purchaser: Optional[PurchaserDTO] = None
    line_items: List[OrderLineItemDTO] = Field(default_factory=list)
    adjustments: List[OrderAdjustmentDTO] = Field(default_factory=list)
    total_price: Decimal
    total_paid: Decimal = Decimal("0")
    total_shipping_cost: Decimal = Decimal("0")
    is_paid: bool = False
    date_paid: Optional[datetime] = None
    last_transaction_reference: Optional[str] = None

    @field_validator('currency')
    @classmethod
    def validate_currency(cls, v: str) -> str:
        """Validate ISO currency code."""
        if len(v) != 3 or not v.isalpha():
            raise ValueError("Currency must be a 3-letter ISO code")
        return v.upper()

    def to_domain(self) -> Order:
        purchaser = None
        if self.purchaser is not None:
            purchaser = Purchaser(
                name=self.purchaser.name,
                email=self.purchaser.email,
                first_name=self.purchaser.first_name,
                last_name=self.purchaser.last_name,
            )

        return Order(
            id=self.id,
            reference=self.reference,
            currency=self.currency,
            total_price=self.total_price,
            purchaser=purchaser,
            line_items=[
                OrderLineItem(
                    description=item.description,
                    quantity=item.quantity,
                    price=item.price,
                    sale_price=item.sale_price,
                    discount=item.discount,
                    subtotal=item.subtotal,
                    sku=item.sku,
                )
                for item in self.line_items
            ],
            adjustments=[
                OrderAdjustment(type=adj.type, name=adj.name, amount=adj.amount)
                for adj in self.adjustments
            ],
            total_paid=self.total_paid,
            total_shipping_cost=self.total_shipping_cost,
            is_paid=self.is_paid,
            date_paid=self.date_paid,
            last_transaction_reference=self.last_transaction_reference,
        )
