"""SQLAlchemy ORM model for the order to invoice link table."""

from datetime import datetime

from sqlalchemy import Column, DateTime, Integer, String

from .base import Base


class InvoiceLinkModel(Base):
    """SQLAlchemy ORM model for invoice_links table."""

    __tablename__ = "invoice_links"

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(String(64), unique=True, nullable=False, index=True)
    invoice_id = Column(String(64), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f"<InvoiceLinkModel(order_id={self.order_id}, invoice_id={self.invoice_id})>"
