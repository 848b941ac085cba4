"""Database engine and session management."""

from .config import (
    close_database,
    create_engine,
    create_session_factory,
    init_database,
)

__all__ = [
    "close_database",
    "create_engine",
    "create_session_factory",
    "init_database",
]
