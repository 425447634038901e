"""Database layer for moneytrack application."""

from moneytrack.database.base import Database
from moneytrack.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
