"""Database engine, sessions and table setup."""

from app.db.database import (
    SessionFactory,
    close_db,
    create_engine,
    create_session_factory,
    init_db,
    transaction,
)

__all__ = [
    "SessionFactory",
    "close_db",
    "create_engine",
    "create_session_factory",
    "init_db",
    "transaction",
]
