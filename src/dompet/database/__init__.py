"""Database layer for dompet application."""

from dompet.database.base import Database
from dompet.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
