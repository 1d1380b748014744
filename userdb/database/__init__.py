"""Database package."""

from userdb.database.session import (
    DatabaseHandle,
    create_db_engine,
    create_all_tables,
    drop_all_tables,
)

__all__ = [
    "DatabaseHandle",
    "create_db_engine",
    "create_all_tables",
    "drop_all_tables",
]
