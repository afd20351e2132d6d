"""Database factory functions for creating database instances."""

from pathlib import Path

from procureflow.database.sqlalchemy_db import SQLAlchemyDatabase


def create_sqlite_database(database_path: str | Path) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    The path is used as given; resolving defaults and environment variables
    is left to procureflow.config.Settings.

    Args:
        database_path: Path to SQLite database file. Missing parent
            directories are created.

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    path = Path(database_path).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    return SQLAlchemyDatabase(f"sqlite:///{path}")
