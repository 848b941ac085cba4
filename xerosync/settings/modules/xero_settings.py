from __future__ import annotations

from typing import Optional

from pydantic import Field

from xerosync.settings.base import XeroSyncBaseSettings


class XeroSettings(XeroSyncBaseSettings):
    """
    Settings for the Xero API connection.

    Tokens are issued elsewhere; this service only consumes them.
    """

    client_id: str = Field(..., alias="XERO_CLIENT_ID")
    client_secret: str = Field(..., alias="XERO_CLIENT_SECRET")
    tenant_id: str = Field(..., alias="XERO_TENANT_ID")
    access_token: str = Field(..., alias="XERO_ACCESS_TOKEN")
    refresh_token: Optional[str] = Field(default=None, alias="XERO_REFRESH_TOKEN")
