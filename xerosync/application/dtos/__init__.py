"""Application DTOs."""

from .order_dto import OrderAdjustmentDTO, OrderDTO, OrderLineItemDTO, PurchaserDTO
from .sync_dto import InvoiceStatusDTO, OrderSyncResponseDTO, SyncErrorDTO

__all__ = [
    "OrderAdjustmentDTO",
    "OrderDTO",
    "OrderLineItemDTO",
    "PurchaserDTO",
    "InvoiceStatusDTO",
    "OrderSyncResponseDTO",
    "SyncErrorDTO",
]
