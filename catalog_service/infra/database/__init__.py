"""Database infrastructure: async engine, sessions, lifecycle."""

from catalog_service.infra.database.session import (
    AsyncSessionLocal,
    close_database,
    create_tables,
    drop_tables,
    engine,
    get_async_session,
    init_database,
)

__all__ = [
    "AsyncSessionLocal",
    "close_database",
    "create_tables",
    "drop_tables",
    "engine",
    "get_async_session",
    "init_database",
]
