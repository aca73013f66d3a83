"""Database layer for plantbook application."""

from plantbook.database.base import Database
from plantbook.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
