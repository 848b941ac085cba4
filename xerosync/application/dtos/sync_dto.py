"""DTOs for order sync responses."""
from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from xerosync.application.use_cases import SyncErrorDetail, SyncOrderResponse


class SyncErrorDTO(BaseModel):
    kind: str
    message: str
    code: Optional[Any] = None

    @classmethod
    def from_detail(cls, detail: Optional[SyncErrorDetail]) -> Optional["SyncErrorDTO"]:
        if detail is None:
            return None
        return cls(kind=detail.kind, message=detail.message, code=detail.code)


class OrderSyncResponseDTO(BaseModel):
    """Response DTO for order sync operation."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "execution_id": "123e4567-e89b-12d3-a456-426614174000",
                "order_id": "1001",
                "success": True,
                "already_invoiced": False,
                "contact_id": "b7a6...",
                "invoice_id": "3f1c...",
                "invoice_total": "30.00",
                "rounding_adjustment": None,
                "payment_id": "9d2e...",
                "timestamp": "2026-01-15T10:30:00Z",
            }
        }
    )

    execution_id: str = Field(..., description="Unique execution ID for tracing")
    order_id: str = Field(..., description="Commerce order ID")
    success: bool = Field(..., description="Whether contact and invoice stages succeeded")
    already_invoiced: bool = Field(default=False, description="Order was skipped: already linked")

    contact_id: Optional[str] = None
    invoice_id: Optional[str] = None
    invoice_total: Optional[Decimal] = None
    rounding_adjustment: Optional[Decimal] = None
    payment_id: Optional[str] = None

    failed_stage: Optional[str] = Field(default=None, description="guard, contact or invoice")
    error: Optional[SyncErrorDTO] = None
    payment_error: Optional[SyncErrorDTO] = None

    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Response timestamp")

    @classmethod
    def from_response(cls, response: SyncOrderResponse) -> "OrderSyncResponseDTO":
        return cls(
            execution_id=str(response.execution_id),
            order_id=response.order_id,
            success=response.success,
            already_invoiced=response.already_invoiced,
            contact_id=response.contact_id,
            invoice_id=response.invoice_id,
            invoice_total=response.invoice_total,
            rounding_adjustment=response.rounding_adjustment,
            payment_id=response.payment_id,
            failed_stage=response.failed_stage,
            error=SyncErrorDTO.from_detail(response.error),
            payment_error=SyncErrorDTO.from_detail(response.payment_error),
            timestamp=response.timestamp,
        )


class InvoiceStatusDTO(BaseModel):
    """Response DTO for ``GET /orders/{order_id}/invoice``."""

    order_id: str
    invoiced: bool
    invoice_id: Optional[str] = None
