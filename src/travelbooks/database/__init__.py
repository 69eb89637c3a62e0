"""Database layer for travelbooks application."""

from travelbooks.database.base import Database
from travelbooks.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
