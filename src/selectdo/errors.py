"""Exception hierarchy for Select + Do."""

from __future__ import annotations


class SelectDoError(Exception):
    """Base class for all application errors."""


class PersistenceError(SelectDoError):
    """Raised by repository adapters when the underlying store fails."""


class TaskNotFoundError(SelectDoError):
    """Raised when a task id or suffix cannot be resolved."""


class FocusSessionError(SelectDoError):
    """Raised on an invalid focus session transition."""


class FocusSessionActiveError(FocusSessionError):
    """Raised when starting a session while another one is running."""

    def __init__(self, task_title: str):
        super().__init__(f"A focus session is already running: {task_title}")
        self.task_title = task_title
