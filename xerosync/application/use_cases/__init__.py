"""Application use cases."""

from .sync_order import (
    SyncErrorDetail,
    SyncOrderResponse,
    SyncOrderUseCase,
)

__all__ = ["SyncErrorDetail", "SyncOrderResponse", "SyncOrderUseCase"]
