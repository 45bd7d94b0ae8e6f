"""Database schema definitions for the local SQLite record store."""

from __future__ import annotations

# Tasks table - main task entity
CREATE_TASKS_TABLE = """
CREATE TABLE IF NOT EXISTS tasks (
    id TEXT PRIMARY KEY,
    title TEXT NOT NULL,
    context TEXT NOT NULL,
    kind TEXT NOT NULL,
    minutes INTEGER NOT NULL CHECK (minutes > 0),
    is_priority BOOLEAN NOT NULL DEFAULT 0,
    completed_at DATETIME,
    updated_at DATETIME NOT NULL,
    created_at DATETIME NOT NULL,
    energy TEXT,
    project TEXT
)
"""

# Task tags - ordered set of tags per task
CREATE_TASK_TAGS_TABLE = """
CREATE TABLE IF NOT EXISTS task_tags (
    task_id TEXT NOT NULL,
    position INTEGER NOT NULL,
    tag TEXT NOT NULL,
    PRIMARY KEY (task_id, position),
    FOREIGN KEY (task_id) REFERENCES tasks(id) ON DELETE CASCADE
)
"""

CREATE_TASK_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_tasks_updated ON tasks(updated_at)",
    "CREATE INDEX IF NOT EXISTS idx_tasks_context_open ON tasks(context, completed_at)",
    "CREATE INDEX IF NOT EXISTS idx_task_tags_tag ON task_tags(tag)",
]

# All table creation statements in order
ALL_TABLES = [
    CREATE_TASKS_TABLE,
    CREATE_TASK_TAGS_TABLE,
]

ALL_INDEXES = CREATE_TASK_INDEXES


def initialize_schema(connection) -> None:
    """Initialize database schema with all tables and indexes.

    Args:
        connection: sqlite3.Connection object
    """
    cursor = connection.cursor()

    for create_statement in ALL_TABLES:
        cursor.execute(create_statement)

    for index_statement in ALL_INDEXES:
        cursor.execute(index_statement)

    connection.commit()

