"""Database layer for dailyledger application."""

from dailyledger.database.base import Database
from dailyledger.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
