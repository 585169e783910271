"""Database layer for drivetally application."""

from drivetally.database.base import Database
from drivetally.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
