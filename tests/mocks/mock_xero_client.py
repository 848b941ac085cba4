"""
Mock Xero client for testing without network access.

Keeps contacts, invoices, accounts and payments in memory. Remote totals
are either computed from the lines or taken from a queue, so tests can
simulate Xero's rounding drift.
"""
from copy import deepcopy
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from xerosync.application.interfaces import IAccountingClient
from xerosync.domain.entities import Account, Contact, Invoice, Payment
from xerosync.domain.errors import RemoteServiceError
from xerosync.domain.value_objects import normalize


class MockXeroClient(IAccountingClient):
    """In-memory IAccountingClient."""

    def __init__(
        self,
        contacts: Optional[Iterable[Contact]] = None,
        accounts: Optional[Iterable[Account]] = None,
        invoice_totals: Optional[Iterable] = None,
    ):
        self.contacts: List[Contact] = list(contacts or [])
        self.accounts: Dict[str, Account] = {a.code: a for a in (accounts or [])}
        self.invoice_totals: List[Decimal] = [Decimal(str(t)) for t in (invoice_totals or [])]

        self.invoices: Dict[str, Invoice] = {}
        self.payments: List[Payment] = []

        # Snapshot of every invoice as it was sent on each save
        self.saved_invoices: List[Invoice] = []
        self.calls: Dict[str, List] = {}
        self.failures: Dict[str, Exception] = {}

        self._next_id = 0

    # ------------------------------------------------------------------
    # Test helpers
    # ------------------------------------------------------------------

    def fail_on(self, method: str, error: Optional[Exception] = None) -> None:
        """Make ``method`` raise ``error`` (RemoteServiceError by default)."""
        self.failures[method] = error or RemoteServiceError(
            f"{method} failed", code=500
        )

    def call_count(self, method: str) -> int:
        return len(self.calls.get(method, []))

    @property
    def save_count(self) -> int:
        return self.call_count("save_invoice")

    def _record(self, method: str, arg) -> None:
        self.calls.setdefault(method, []).append(arg)
        if method in self.failures:
            raise self.failures[method]

    def _new_id(self, prefix: str) -> str:
        self._next_id += 1
        return f"{prefix}-{self._next_id}"

    @staticmethod
    def _lines_total(invoice: Invoice) -> Decimal:
        total = Decimal("0")
        for line in invoice.line_items:
            amount = line.unit_amount * line.quantity
            if line.discount_rate is not None:
                amount = amount * (Decimal(100) - abs(line.discount_rate)) / Decimal(100)
            total += amount
        return normalize(total)

    # ------------------------------------------------------------------
    # IAccountingClient
    # ------------------------------------------------------------------

    async def find_contact(self, where: str) -> Optional[Contact]:
        self._record("find_contact", where)
        for contact in self.contacts:
            values = [contact.name, contact.email_address]
            if any(v and f'"{v}"' in where for v in values):
                return contact
        return None

    async def create_contact(self, contact: Contact) -> Contact:
        self._record("create_contact", contact)
        contact.contact_id = self._new_id("contact")
        self.contacts.append(contact)
        return contact

    async def save_invoice(self, invoice: Invoice) -> Invoice:
        self._record("save_invoice", invoice)
        self.saved_invoices.append(deepcopy(invoice))

        if invoice.invoice_id is None:
            invoice.invoice_id = self._new_id("invoice")
        if self.invoice_totals:
            invoice.total = self.invoice_totals.pop(0)
        else:
            invoice.total = self._lines_total(invoice)

        self.invoices[invoice.invoice_id] = invoice
        return invoice

    async def find_account_by_code(self, code: str) -> Optional[Account]:
        self._record("find_account_by_code", code)
        return self.accounts.get(code)

    async def create_payment(self, payment: Payment) -> Payment:
        self._record("create_payment", payment)
        payment.payment_id = self._new_id("payment")
        self.payments.append(payment)
        return payment
