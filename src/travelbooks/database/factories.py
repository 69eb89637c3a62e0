"""Database factory functions for creating database instances."""

from typing import Optional

from travelbooks.database.sqlalchemy_db import SQLAlchemyDatabase
from travelbooks.settings import Settings


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file. If None, checks TRAVELBOOKS_DB_PATH
            environment variable, then defaults to ~/.travelbooks/travelbooks.db

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    if database_path is None:
        database_path = Settings.from_env().resolve_database_path()

    database_url = f"sqlite:///{database_path}"
    return SQLAlchemyDatabase(database_url)
