"""Factory for the SQLite store holding saved scenarios and the last session."""

import os
from pathlib import Path
from typing import Optional

from rentaltax.database.sqlalchemy_db import SQLAlchemyDatabase

DB_PATH_ENV = "RENTALTAX_DB_PATH"


def default_database_path() -> Path:
    """Return ~/.rentaltax/rentaltax.db, creating the directory if needed."""
    db_dir = Path.home() / ".rentaltax"
    db_dir.mkdir(exist_ok=True)
    return db_dir / "rentaltax.db"


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Open the scenario store in a SQLite file.

    Tables are created on first use, so a fresh path yields an empty store.

    Args:
        database_path: SQLite file to use. Falls back to $RENTALTAX_DB_PATH,
            then to ~/.rentaltax/rentaltax.db

    Returns:
        SQLAlchemyDatabase bound to the file
    """
    if database_path is None:
        database_path = os.environ.get(DB_PATH_ENV)

    if database_path is None:
        database_path = str(default_database_path())

    return SQLAlchemyDatabase(f"sqlite:///{database_path}")
