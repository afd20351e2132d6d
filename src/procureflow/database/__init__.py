"""Database layer for procureflow application."""

from procureflow.database.base import Database, FinalizationRecord
from procureflow.database.factories import create_sqlite_database

__all__ = ["Database", "FinalizationRecord", "create_sqlite_database"]
