from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import Field

from xerosync.domain.entities.accounting import LineAmountType
from xerosync.domain.errors import ConfigurationError
from xerosync.domain.value_objects import DEFAULT_DECIMALS
from xerosync.settings.base import XeroSyncBaseSettings


class AccountRole(str, Enum):
    """Ledger roles that map to a configured Xero account code."""

    SALES = "sales"
    SHIPPING = "shipping"
    DISCOUNT = "discount"
    ADDITIONAL_FEES = "additional_fees"
    ROUNDING = "rounding"
    RECEIVABLE = "receivable"


class ContactMatchMode(str, Enum):
    """
    How an existing Xero Contact is matched to the purchaser.

    ``legacy`` compares both Name and EmailAddress against the display
    name, which is how contacts have always been matched.
    """

    LEGACY = "legacy"
    NAME = "name"
    EMAIL = "email"
    NAME_OR_EMAIL = "name_or_email"


class SyncSettings(XeroSyncBaseSettings):
    """
    Order sync settings: account codes and feature flags.

    Loaded from .env with exact variable name matching. Account codes are
    optional here; a missing code only fails when a line actually needs it.
    """

    account_sales: Optional[str] = Field(default=None, alias="XERO_ACCOUNT_SALES")
    account_shipping: Optional[str] = Field(default=None, alias="XERO_ACCOUNT_SHIPPING")
    account_discount: Optional[str] = Field(default=None, alias="XERO_ACCOUNT_DISCOUNT")
    account_additional_fees: Optional[str] = Field(
        default=None, alias="XERO_ACCOUNT_ADDITIONAL_FEES"
    )
    account_rounding: Optional[str] = Field(default=None, alias="XERO_ACCOUNT_ROUNDING")
    account_receivable: Optional[str] = Field(default=None, alias="XERO_ACCOUNT_RECEIVABLE")

    create_payments: bool = Field(default=False, alias="XERO_CREATE_PAYMENTS")
    update_inventory: bool = Field(default=False, alias="XERO_UPDATE_INVENTORY")

    contact_match_mode: ContactMatchMode = Field(
        default=ContactMatchMode.LEGACY, alias="XERO_CONTACT_MATCH_MODE"
    )
    correct_rounding_undershoot: bool = Field(
        default=False, alias="XERO_CORRECT_ROUNDING_UNDERSHOOT"
    )
    line_amount_type: LineAmountType = Field(
        default=LineAmountType.EXCLUSIVE, alias="XERO_LINE_AMOUNT_TYPE"
    )
    skip_invoiced_orders: bool = Field(default=True, alias="XERO_SKIP_INVOICED_ORDERS")
    decimals: int = Field(default=DEFAULT_DECIMALS, ge=0, alias="XERO_DECIMALS")

    def account_code(self, role: AccountRole) -> str:
        """
        Return the configured account code for ``role``.

        Raises:
            ConfigurationError: If no code is configured for the role
        """
        code = getattr(self, f"account_{role.value}")
        if not code:
            raise ConfigurationError(
                f"No Xero account code configured for '{role.value}'",
                code=f"account_{role.value}",
            )
        return code
