"""Database factory functions for creating database instances."""

import os
from pathlib import Path
from typing import Optional

from dompet.database.sqlalchemy_db import SQLAlchemyDatabase

DEFAULT_USER = "local"


def create_sqlite_database(
    database_path: Optional[str] = None, user_id: Optional[str] = None
) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file. If None, checks DOMPET_DB_PATH
            environment variable, then defaults to ~/.dompet/dompet.db
        user_id: Owner of the data. If None, checks DOMPET_USER environment
            variable, then defaults to "local"

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    if database_path is None:
        database_path = os.environ.get("DOMPET_DB_PATH")

    if database_path is None:
        db_dir = Path.home() / ".dompet"
        db_dir.mkdir(exist_ok=True)
        database_path = str(db_dir / "dompet.db")

    if user_id is None:
        user_id = os.environ.get("DOMPET_USER") or DEFAULT_USER

    database_url = f"sqlite:///{database_path}"
    return SQLAlchemyDatabase(database_url, user_id=user_id)
