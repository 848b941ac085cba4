"""Xero accounting adapter."""

from .client import XeroAccountingClient
from .mapper import XeroMapper

__all__ = ["XeroAccountingClient", "XeroMapper"]
