"""Database package: shared engine and session factory."""

from construction_stages.db.base import Base, close_db, get_session_factory, init_db, ping_database

__all__ = [
    "Base",
    "close_db",
    "get_session_factory",
    "init_db",
    "ping_database",
]
