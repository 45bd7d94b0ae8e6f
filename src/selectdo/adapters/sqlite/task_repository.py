"""SQLite implementation of TaskRepository."""

from __future__ import annotations

import sqlite3
from pathlib import Path

from selectdo.adapters.sqlite.connection import get_connection
from selectdo.adapters.sqlite.utils import parse_datetime, row_to_dict, to_iso
from selectdo.errors import PersistenceError
from selectdo.models import Task
from selectdo.repositories import TaskRepository


class SqliteTaskRepository(TaskRepository):
    """SQLite implementation of task repository."""

    def __init__(
        self,
        db_path: str | Path | None = None,
        connection: sqlite3.Connection | None = None,
    ):
        """Initialize SQLite task repository.

        Args:
            db_path: Optional database file path. If None, uses default location.
            connection: Optional ready connection (schema already applied).
        """
        self.db_path = db_path
        self._connection = connection

    @property
    def connection(self) -> sqlite3.Connection:
        """Get or create database connection."""
        if self._connection is None:
            try:
                self._connection = get_connection(self.db_path)
            except (sqlite3.Error, OSError) as e:
                raise PersistenceError(f"Cannot open task database: {e}") from e
        return self._connection

    def list_all(self) -> list[Task]:
        """List all tasks, most recently updated first."""
        try:
            cursor = self.connection.execute(
                "SELECT * FROM tasks ORDER BY updated_at DESC, created_at DESC"
            )
            rows = cursor.fetchall()
            tags_by_task = self._get_all_tags()
        except sqlite3.Error as e:
            raise PersistenceError(f"Failed to list tasks: {e}") from e

        return [self._row_to_task(row, tags_by_task.get(row["id"], [])) for row in rows]

    def get(self, task_id: str) -> Task | None:
        """Get a specific task by ID."""
        try:
            cursor = self.connection.execute(
                "SELECT * FROM tasks WHERE id = ?", (task_id,)
            )
            row = cursor.fetchone()
            if not row:
                return None
            tags = self._get_task_tags(task_id)
        except sqlite3.Error as e:
            raise PersistenceError(f"Failed to load task {task_id}: {e}") from e

        return self._row_to_task(row, tags)

    def save(self, task: Task) -> None:
        """Insert or update a task and replace its tags."""
        try:
            with self.connection:
                self.connection.execute(
                    """INSERT INTO tasks (
                        id, title, context, kind, minutes, is_priority,
                        completed_at, updated_at, created_at, energy, project
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                    ON CONFLICT(id) DO UPDATE SET
                        title = excluded.title,
                        context = excluded.context,
                        kind = excluded.kind,
                        minutes = excluded.minutes,
                        is_priority = excluded.is_priority,
                        completed_at = excluded.completed_at,
                        updated_at = excluded.updated_at,
                        energy = excluded.energy,
                        project = excluded.project""",
                    (
                        task.id,
                        task.title,
                        task.context,
                        task.kind,
                        task.minutes,
                        task.is_priority,
                        to_iso(task.completed_at),
                        to_iso(task.updated_at),
                        to_iso(task.created_at),
                        task.energy,
                        task.project,
                    ),
                )
                self._set_task_tags(task.id, task.tags)
        except sqlite3.Error as e:
            raise PersistenceError(f"Failed to save task {task.id}: {e}") from e

    def delete(self, task_id: str) -> bool:
        """Delete a task; its tags go with it (ON DELETE CASCADE)."""
        try:
            with self.connection:
                cursor = self.connection.execute(
                    "DELETE FROM tasks WHERE id = ?", (task_id,)
                )
        except sqlite3.Error as e:
            raise PersistenceError(f"Failed to delete task {task_id}: {e}") from e

        return cursor.rowcount > 0

    def _row_to_task(self, row: sqlite3.Row, tags: list[str]) -> Task:
        task_dict = row_to_dict(row)
        task_dict["is_priority"] = bool(task_dict["is_priority"])
        for key in ("completed_at", "updated_at", "created_at"):
            task_dict[key] = parse_datetime(task_dict[key])
        task_dict["tags"] = tags
        return Task(**task_dict)

    def _get_task_tags(self, task_id: str) -> list[str]:
        """Get tags for a task in stored order."""
        cursor = self.connection.execute(
            "SELECT tag FROM task_tags WHERE task_id = ? ORDER BY position",
            (task_id,),
        )
        return [row[0] for row in cursor.fetchall()]

    def _get_all_tags(self) -> dict[str, list[str]]:
        cursor = self.connection.execute(
            "SELECT task_id, tag FROM task_tags ORDER BY task_id, position"
        )
        tags: dict[str, list[str]] = {}
        for task_id, tag in cursor.fetchall():
            tags.setdefault(task_id, []).append(tag)
        return tags

    def _set_task_tags(self, task_id: str, tags: list[str]) -> None:
        """Set tags for a task (replaces existing)."""
        self.connection.execute("DELETE FROM task_tags WHERE task_id = ?", (task_id,))

        for position, tag in enumerate(tags):
            self.connection.execute(
                "INSERT INTO task_tags (task_id, position, tag) VALUES (?, ?, ?)",
                (task_id, position, tag),
            )
