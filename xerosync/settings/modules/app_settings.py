from __future__ import annotations

from functools import lru_cache

from pydantic import BaseModel, ConfigDict

from xerosync.settings.modules.database_settings import DatabaseSettings
from xerosync.settings.modules.sync_settings import SyncSettings


class AppSettings(BaseModel):
    """
    Application settings aggregator.

    Xero credentials are not part of it: they are only loaded when a real
    Xero client is built (see ``xerosync.api.deps``).
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, extra="ignore")

    sync: SyncSettings
    database: DatabaseSettings


@lru_cache()
def get_app_settings() -> AppSettings:
    return AppSettings(
        sync=SyncSettings(),
        database=DatabaseSettings(),
    )
