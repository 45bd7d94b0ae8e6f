"""Repository abstraction layer for Select + Do.

The task store keeps the authoritative in-memory collection and writes
every mutation through a ``TaskRepository`` (the "port"). Adapters under
``selectdo.adapters`` provide the concrete storage.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from selectdo.models import Task


class TaskRepository(ABC):
    """Abstract base class for task persistence operations.

    Implementations raise ``PersistenceError`` when the underlying
    storage fails.
    """

    @abstractmethod
    def list_all(self) -> list[Task]:
        """List every stored task.

        Returns:
            Tasks ordered by updated_at, most recent first
        """
        raise NotImplementedError(
            "TaskRepository.list_all() must be implemented by adapter"
        )

    @abstractmethod
    def get(self, task_id: str) -> Task | None:
        """Get a specific task by ID.

        Args:
            task_id: Unique identifier for the task

        Returns:
            Task object, or None if it does not exist
        """
        raise NotImplementedError("TaskRepository.get() must be implemented by adapter")

    @abstractmethod
    def save(self, task: Task) -> None:
        """Create or update a task keyed by its ID.

        Args:
            task: Complete task record to store
        """
        raise NotImplementedError(
            "TaskRepository.save() must be implemented by adapter"
        )

    @abstractmethod
    def delete(self, task_id: str) -> bool:
        """Delete a task.

        Args:
            task_id: Unique identifier for the task

        Returns:
            True if a task was removed, False if it did not exist
        """
        raise NotImplementedError(
            "TaskRepository.delete() must be implemented by adapter"
        )
