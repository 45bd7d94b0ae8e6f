"""SQLite adapter module - Local database storage implementation."""

from selectdo.adapters.sqlite.connection import DatabaseConnection, get_connection
from selectdo.adapters.sqlite.task_repository import SqliteTaskRepository

__all__ = [
    "DatabaseConnection",
    "SqliteTaskRepository",
    "get_connection",
]
