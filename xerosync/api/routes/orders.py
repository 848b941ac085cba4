"""Order sync endpoints for REST API."""

import logging

from fastapi import APIRouter, Depends, HTTPException

from xerosync.application.dtos import InvoiceStatusDTO, OrderDTO, OrderSyncResponseDTO
from xerosync.application.use_cases import SyncOrderUseCase
from xerosync.domain.errors import SyncError

from xerosync.api.deps import get_sync_order_use_case

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/orders", tags=["orders"])


@router.post("/sync", response_model=OrderSyncResponseDTO)
async def sync_order(
    request: OrderDTO,
    use_case: SyncOrderUseCase = Depends(get_sync_order_use_case),
) -> OrderSyncResponseDTO:
    """Send an order to Xero.

    The pipeline never raises: a failed sync is still a 200 response with
    ``success=false`` and a structured ``error``.

    Args:
        request: Order payload
        use_case: SyncOrderUseCase instance

    Returns:
        OrderSyncResponseDTO with sync results
    """
    try:
        order = request.to_domain()
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    response = await use_case.execute(order)
    return OrderSyncResponseDTO.from_response(response)


@router.get("/{order_id}/invoice", response_model=InvoiceStatusDTO)
async def get_order_invoice(
    order_id: str,
    use_case: SyncOrderUseCase = Depends(get_sync_order_use_case),
) -> InvoiceStatusDTO:
    """Tell whether an order has already been invoiced.

    Args:
        order_id: Commerce order id
        use_case: SyncOrderUseCase instance

    Returns:
        InvoiceStatusDTO for the order

    Raises:
        HTTPException: If the link table cannot be read
    """
    try:
        link = await use_case.get_invoice_link(order_id)
    except SyncError as e:
        logger.error(f"Error reading invoice link for {order_id}: {e.message}", exc_info=True)
        raise HTTPException(status_code=503, detail="Invoice link store unavailable")

    return InvoiceStatusDTO(
        order_id=order_id,
        invoiced=link is not None,
        invoice_id=link.invoice_id if link else None,
    )
