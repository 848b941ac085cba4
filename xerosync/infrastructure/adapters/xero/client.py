"""Xero API client using the official xero-python SDK.

Wraps the synchronous SDK calls with asyncio.to_thread() to stay async
with the rest of the pipeline. Every SDK failure surfaces as
RemoteServiceError carrying the HTTP status as its code.

Token issuance and refresh are handled outside this service: the client
is given an access token and keeps it in memory.
"""
import asyncio
import logging
from typing import Any, Callable, Dict, Optional, TypeVar

from xero_python.accounting import AccountingApi, Contacts, Invoices
from xero_python.api_client import ApiClient, Configuration
from xero_python.api_client.oauth2 import OAuth2Token
from xero_python.exceptions import AccountingBadRequestException

from xerosync.application.interfaces import IAccountingClient, equals
from xerosync.domain.entities import Account, Contact, Invoice, Payment
from xerosync.domain.errors import RemoteServiceError
from xerosync.settings import XeroSettings

from .mapper import XeroMapper

logger = logging.getLogger(__name__)

T = TypeVar("T")


class XeroAccountingClient(IAccountingClient):
    """Client for the Xero Accounting API."""

    def __init__(
        self,
        settings: XeroSettings,
        accounting_api: Optional[AccountingApi] = None,
    ):
        """Initialize Xero client.

        Args:
            settings: Xero credentials and tenant
            accounting_api: Pre-built AccountingApi (tests); built from
                settings when omitted
        """
        self.settings = settings
        self._tenant_id = settings.tenant_id
        self._token: Dict[str, Any] = {
            "access_token": settings.access_token,
            "refresh_token": settings.refresh_token,
            "token_type": "Bearer",
            "expires_in": 1800,
            "scope": ["accounting.transactions", "accounting.contacts", "accounting.settings"],
        }
        self._accounting_api = accounting_api or self._build_accounting_api()

    def _build_accounting_api(self) -> AccountingApi:
        api_client = ApiClient(
            Configuration(
                debug=False,
                oauth2_token=OAuth2Token(
                    client_id=self.settings.client_id,
                    client_secret=self.settings.client_secret,
                ),
            ),
            pool_threads=1,
        )
        api_client.oauth2_token_getter(self._get_token)
        api_client.oauth2_token_saver(self._save_token)
        api_client.set_oauth2_token(self._token)
        logger.info("Xero SDK client initialized")
        return AccountingApi(api_client)

    def _get_token(self) -> Dict[str, Any]:
        return self._token

    def _save_token(self, token: Dict[str, Any]) -> None:
        self._token = token

    async def _call(self, operation: str, fn: Callable[[], T]) -> T:
        """Run an SDK call in a worker thread, wrapping failures."""
        try:
            return await asyncio.to_thread(fn)
        except AccountingBadRequestException as e:
            logger.error(f"Xero rejected {operation}: {e}")
            raise RemoteServiceError(
                f"Xero rejected {operation}: {e}", code=getattr(e, "status", 400)
            ) from e
        except Exception as e:
            logger.error(f"Xero error in {operation}: {e}", exc_info=True)
            raise RemoteServiceError(
                f"Xero error in {operation}: {e}", code=getattr(e, "status", None)
            ) from e

    # =========================================================================
    # CONTACTS
    # =========================================================================

    async def find_contact(self, where: str) -> Optional[Contact]:
        result = await self._call(
            "get_contacts",
            lambda: self._accounting_api.get_contacts(self._tenant_id, where=where),
        )
        contacts = result.contacts or []
        if not contacts:
            return None
        return XeroMapper.from_xero_contact(contacts[0])

    async def create_contact(self, contact: Contact) -> Contact:
        payload = Contacts(contacts=[XeroMapper.to_xero_contact(contact)])
        result = await self._call(
            "create_contacts",
            lambda: self._accounting_api.create_contacts(self._tenant_id, contacts=payload),
        )
        return XeroMapper.from_xero_contact(result.contacts[0])

    # =========================================================================
    # INVOICES
    # =========================================================================

    async def save_invoice(self, invoice: Invoice) -> Invoice:
        def _save():
            payload = Invoices(invoices=[XeroMapper.to_xero_invoice(invoice)])
            return self._accounting_api.update_or_create_invoices(
                self._tenant_id, invoices=payload
            )

        result = await self._call("update_or_create_invoices", _save)
        return XeroMapper.apply_saved_invoice(invoice, result.invoices[0])

    # =========================================================================
    # ACCOUNTS & PAYMENTS
    # =========================================================================

    async def find_account_by_code(self, code: str) -> Optional[Account]:
        where = equals("Code", code)
        result = await self._call(
            "get_accounts",
            lambda: self._accounting_api.get_accounts(self._tenant_id, where=where),
        )
        accounts = result.accounts or []
        if not accounts:
            return None
        return XeroMapper.from_xero_account(accounts[0])

    async def create_payment(self, payment: Payment) -> Payment:
        def _create():
            return self._accounting_api.create_payment(
                self._tenant_id, payment=XeroMapper.to_xero_payment(payment)
            )

        result = await self._call("create_payment", _create)
        return XeroMapper.apply_saved_payment(payment, result.payments[0])
