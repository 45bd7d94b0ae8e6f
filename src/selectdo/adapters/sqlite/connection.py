"""Database connection management for the local SQLite record store.

This module provides a per-process connection manager, ensuring proper
connection lifecycle, WAL mode, and foreign key enforcement.
"""

from __future__ import annotations

import atexit
import os
import sqlite3
from pathlib import Path

from platformdirs import user_data_dir

from selectdo.adapters.sqlite.schema import initialize_schema

MEMORY_DB = ":memory:"


def default_db_path() -> Path:
    """Location of the database when none is configured."""
    return Path(user_data_dir("selectdo")) / "selectdo.db"


class DatabaseConnection:
    """Singleton connection manager for the local SQLite store.

    Provides:
    - Single connection per process (connection reuse)
    - WAL mode for file databases
    - Foreign key constraint enforcement
    - Automatic directory creation
    - Owner-only file permissions
    - Graceful cleanup on exit
    """

    _instance: DatabaseConnection | None = None
    _connection: sqlite3.Connection | None = None
    _db_path: Path | str | None = None

    def __new__(cls) -> DatabaseConnection:
        """Ensure singleton pattern."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @classmethod
    def get_connection(cls, db_path: str | Path | None = None) -> sqlite3.Connection:
        """Get or create database connection.

        Args:
            db_path: Path to database file, or ":memory:". If None, uses default location.

        Returns:
            sqlite3.Connection with the schema applied
        """
        instance = cls()

        if db_path is None:
            db_path = default_db_path()
        elif str(db_path) != MEMORY_DB:
            db_path = Path(db_path)
        else:
            db_path = MEMORY_DB

        # If connection exists and path hasn't changed, return it
        if instance._connection is not None and instance._db_path == db_path:
            return instance._connection

        # Close existing connection if path changed
        if instance._connection is not None:
            instance._connection.close()

        connection = open_connection(db_path)

        instance._connection = connection
        instance._db_path = db_path

        atexit.register(cls.close_connection)

        return connection

    @classmethod
    def close_connection(cls) -> None:
        """Close database connection gracefully."""
        instance = cls()
        if instance._connection is not None:
            try:
                instance._connection.commit()
                instance._connection.close()
            except sqlite3.Error:
                pass  # Ignore errors during cleanup
            finally:
                instance._connection = None
                instance._db_path = None


def open_connection(db_path: str | Path) -> sqlite3.Connection:
    """Open a configured connection and make sure the schema exists.

    Args:
        db_path: Database file path or ":memory:"

    Returns:
        Configured sqlite3.Connection
    """
    in_memory = str(db_path) == MEMORY_DB
    is_new_database = False

    if not in_memory:
        db_path = Path(db_path)
        db_path.parent.mkdir(parents=True, exist_ok=True)
        is_new_database = not db_path.exists()

    connection = sqlite3.connect(
        str(db_path),
        check_same_thread=False,
        timeout=30.0,
    )

    connection.row_factory = sqlite3.Row
    connection.execute("PRAGMA foreign_keys = ON")
    if not in_memory:
        connection.execute("PRAGMA journal_mode = WAL")

    initialize_schema(connection)

    if is_new_database:
        os.chmod(db_path, 0o600)

    return connection


def get_connection(db_path: str | Path | None = None) -> sqlite3.Connection:
    """Helper function to get database connection.

    Args:
        db_path: Optional path to database file

    Returns:
        Configured sqlite3.Connection
    """
    return DatabaseConnection.get_connection(db_path)
