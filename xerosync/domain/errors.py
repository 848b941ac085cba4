"""
Sync pipeline errors.

Every stage raises a subclass of ``SyncError``. The orchestrator catches
them and turns them into a structured error on the response, so callers
can tell which stage failed and why.
"""
from typing import Any, Optional


class SyncError(Exception):
    """Base error for the order sync pipeline."""

    kind = "sync_error"

    def __init__(self, message: str, code: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.code = code


class RemoteServiceError(SyncError):
    """The accounting service rejected or failed a call (network, validation, auth)."""

    kind = "remote_service"


class NotFoundError(SyncError):
    """A remote entity we depend on (e.g. an Account) does not exist."""

    kind = "not_found"


class ConfigurationError(SyncError):
    """A required setting, usually an account code, is missing."""

    kind = "configuration"


class InvalidOrderError(SyncError):
    """The order lacks data the pipeline needs."""

    kind = "invalid_order"


class DuplicateLinkError(SyncError):
    """An order already has an invoice link."""

    kind = "duplicate_link"


class LinkPersistenceError(SyncError):
    """Writing or reading the invoice link failed."""

    kind = "persistence"
