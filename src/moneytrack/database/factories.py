"""Database factory functions for creating database instances."""

import os
from pathlib import Path
from typing import Optional

from moneytrack.database.sqlalchemy_db import SQLAlchemyDatabase

DB_PATH_ENV = "MONEYTRACK_DB_PATH"
DEFAULT_DB_DIR = Path.home() / ".moneytrack"
DEFAULT_DB_FILE = "moneytrack.db"


def resolve_database_path(database_path: Optional[str] = None) -> str:
    """Pick the SQLite file: explicit path, then MONEYTRACK_DB_PATH, then the default.

    The default location ~/.moneytrack/moneytrack.db is created on demand.
    """
    chosen = database_path or os.environ.get(DB_PATH_ENV)
    if chosen:
        return str(Path(chosen).expanduser())

    DEFAULT_DB_DIR.mkdir(parents=True, exist_ok=True)
    return str(DEFAULT_DB_DIR / DEFAULT_DB_FILE)


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite-backed database with its schema in place."""
    return SQLAlchemyDatabase(f"sqlite:///{resolve_database_path(database_path)}")
