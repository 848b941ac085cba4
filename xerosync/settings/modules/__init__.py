from xerosync.settings.modules.app_settings import AppSettings, get_app_settings
from xerosync.settings.modules.database_settings import DatabaseSettings
from xerosync.settings.modules.sync_settings import (
    AccountRole,
    ContactMatchMode,
    SyncSettings,
)
from xerosync.settings.modules.xero_settings import XeroSettings

__all__ = [
    "AppSettings",
    "get_app_settings",
    "DatabaseSettings",
    "AccountRole",
    "ContactMatchMode",
    "SyncSettings",
    "XeroSettings",
]
