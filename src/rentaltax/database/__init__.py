"""Database layer for rentaltax application."""

from rentaltax.database.base import Database
from rentaltax.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
