"""Order to invoice linkage."""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class InvoiceLink:
    """
    Local record mapping a commerce order to its remote invoice.

    Written once after the first successful invoice save. Never updated.
    """
    order_id: str
    invoice_id: str
    created_at: Optional[datetime] = None
