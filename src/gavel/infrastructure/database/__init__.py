"""SQLite database engine and schema via SQLAlchemy Core."""

from gavel.infrastructure.database.engine import create_db_engine, init_database
from gavel.infrastructure.database.schema import auctions, metadata, users

__all__ = [
    "auctions",
    "create_db_engine",
    "init_database",
    "metadata",
    "users",
]
