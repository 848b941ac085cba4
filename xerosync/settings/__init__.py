# Settings package
from xerosync.settings.modules import (
    AccountRole,
    AppSettings,
    ContactMatchMode,
    DatabaseSettings,
    SyncSettings,
    XeroSettings,
    get_app_settings,
)

__all__ = [
    "get_app_settings",
    "AppSettings",
    "AccountRole",
    "ContactMatchMode",
    "DatabaseSettings",
    "SyncSettings",
    "XeroSettings",
]
