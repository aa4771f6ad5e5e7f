"""Database layer for invoicepulse application."""

from invoicepulse.database.base import Database
from invoicepulse.database.store import Collection
from invoicepulse.database.factories import create_sqlite_database

__all__ = ["Database", "Collection", "create_sqlite_database"]
