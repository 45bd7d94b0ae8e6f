"""Task store - the authoritative task collection and all of its mutations.

The store keeps tasks in memory and writes every mutation through a
``TaskRepository``. A failed write is logged and otherwise ignored: the
in-memory collection stays the source of truth for the running process.
"""

from __future__ import annotations

import threading
import uuid
from collections.abc import Callable, Iterable, Sequence
from datetime import UTC, datetime

from selectdo.errors import PersistenceError
from selectdo.models import (
    DEFAULT_CONTEXT,
    DEFAULT_CONTEXTS,
    DEFAULT_KIND,
    TASK_KINDS,
    Task,
    TaskCreate,
    TaskUpdate,
)
from selectdo.repositories import TaskRepository
from selectdo.services.feedback import Feedback, NullFeedback, notify
from selectdo.utils.logger import get_logger

# Fields that cannot be cleared by an edit; None means "leave unchanged".
_REQUIRED_FIELDS = ("title", "context", "kind", "minutes", "is_priority", "tags")


class TaskStore:
    """In-memory task collection backed by a repository.

    All mutations are serialized through one lock so a multi-threaded host
    keeps a single writer. Lookups by a missing id are no-ops.
    """

    def __init__(
        self,
        repository: TaskRepository,
        *,
        feedback: Feedback | None = None,
        contexts: Sequence[str] = DEFAULT_CONTEXTS,
        default_context: str = DEFAULT_CONTEXT,
        kinds: Sequence[str] = TASK_KINDS,
        default_kind: str = DEFAULT_KIND,
        clock: Callable[[], datetime] | None = None,
    ):
        """Initialize the task store.

        Args:
            repository: Persistence collaborator
            feedback: Feedback fired on add/complete/toggle
            contexts: Recognized context labels
            default_context: Context used for unrecognized labels
            kinds: Recognized task kinds
            default_kind: Kind used for unrecognized kinds
            clock: Returns the current time (defaults to UTC now)
        """
        if default_context not in contexts:
            raise ValueError(f"Default context {default_context!r} not in {contexts}")
        if default_kind not in kinds:
            raise ValueError(f"Default kind {default_kind!r} not in {kinds}")
        self.repository = repository
        self.feedback = feedback or NullFeedback()
        self.contexts = tuple(contexts)
        self.default_context = default_context
        self.kinds = tuple(kinds)
        self.default_kind = default_kind
        self._clock = clock or (lambda: datetime.now(UTC))
        self._tasks: dict[str, Task] = {}
        self._lock = threading.RLock()

    def __len__(self) -> int:
        return len(self._tasks)

    def __contains__(self, task_id: object) -> bool:
        return task_id in self._tasks

    def load(self) -> list[Task]:
        """Replace the in-memory collection with the repository contents.

        Contexts outside the recognized set are shown as the default context.

        Raises:
            PersistenceError: If the repository cannot be read
        """
        stored = self.repository.list_all()
        with self._lock:
            self._tasks = {}
            for task in sorted(stored, key=lambda t: t.created_at):
                if task.context not in self.contexts:
                    task = task.model_copy(
                        update={"context": self.default_context}
                    )
                self._tasks[task.id] = task
        get_logger().debug("loaded %d tasks", len(self._tasks))
        return self.all()

    def all(self) -> list[Task]:
        """Snapshot of every task in insertion order."""
        with self._lock:
            return list(self._tasks.values())

    def get(self, task_id: str) -> Task | None:
        return self._tasks.get(task_id)

    def normalize_context(self, context: str | None) -> str:
        """Map a context label onto the recognized set."""
        context = (context or "").strip()
        return context if context in self.contexts else self.default_context

    def normalize_kind(self, kind: str | None) -> str:
        """Map a kind onto the recognized set, ignoring case."""
        wanted = (kind or "").strip().lower()
        for known in self.kinds:
            if known.lower() == wanted:
                return known
        return self.default_kind

    def add(
        self,
        title: str,
        context: str,
        kind: str,
        minutes: int,
        is_priority: bool = False,
        *,
        energy: str | None = None,
        project: str | None = None,
        tags: Iterable[str] = (),
    ) -> Task | None:
        """Create a new open task.

        Returns:
            The new task, or None when the title is blank
        """
        if not title or not title.strip():
            get_logger().debug("add rejected: blank title")
            return None

        data = TaskCreate(
            title=title,
            context=self.normalize_context(context),
            kind=self.normalize_kind(kind),
            minutes=minutes,
            is_priority=is_priority,
            energy=energy,
            project=project,
            tags=list(tags),
        )
        with self._lock:
            now = self._now()
            task = Task(
                id=str(uuid.uuid4()),
                created_at=now,
                updated_at=now,
                completed_at=None,
                **data.model_dump(),
            )
            self._tasks[task.id] = task
            self._persist(task)

        get_logger().info("task added: %s", task.id)
        notify(self.feedback, "light")
        return task

    def complete(self, task_id: str) -> Task | None:
        """Mark a task completed now.

        Completing an already completed task changes nothing.

        Returns:
            The completed task, or None if no task has this id
        """
        with self._lock:
            task = self._tasks.get(task_id)
            if task is None:
                return None
            if task.completed_at is not None:
                return task
            now = self._now(task.updated_at)
            task = self._replace(task, completed_at=now, updated_at=now)

        get_logger().info("task completed: %s", task_id)
        notify(self.feedback, "success")
        return task

    def reopen(self, task_id: str) -> Task | None:
        """Mark a completed task as not completed."""
        with self._lock:
            task = self._tasks.get(task_id)
            if task is None:
                return None
            if task.completed_at is None:
                return task
            task = self._replace(
                task, completed_at=None, updated_at=self._now(task.updated_at)
            )

        get_logger().info("task reopened: %s", task_id)
        return task

    def toggle_priority(self, task_id: str) -> Task | None:
        """Flip the priority flag."""
        with self._lock:
            task = self._tasks.get(task_id)
            if task is None:
                return None
            task = self._replace(
                task,
                is_priority=not task.is_priority,
                updated_at=self._now(task.updated_at),
            )

        notify(self.feedback, "light")
        return task

    def edit(self, task_id: str, updates: TaskUpdate) -> Task | None:
        """Apply the provided fields to a task.

        Returns:
            The updated task, or None if the task is missing or the new
            title is blank
        """
        changes = updates.model_dump(exclude_unset=True)
        for key in _REQUIRED_FIELDS:
            if key in changes and changes[key] is None:
                del changes[key]

        if "title" in changes and not changes["title"].strip():
            get_logger().debug("edit rejected: blank title for %s", task_id)
            return None
        if "context" in changes:
            changes["context"] = self.normalize_context(changes["context"])
        if "kind" in changes:
            changes["kind"] = self.normalize_kind(changes["kind"])

        with self._lock:
            task = self._tasks.get(task_id)
            if task is None:
                return None
            if not changes:
                return task
            task = self._replace(task, updated_at=self._now(task.updated_at), **changes)

        get_logger().info("task edited: %s (%s)", task_id, ", ".join(sorted(changes)))
        return task

    def delete(self, task_id: str) -> bool:
        """Remove a task.

        Returns:
            True if a task was removed, False if it did not exist
        """
        with self._lock:
            if self._tasks.pop(task_id, None) is None:
                return False
            try:
                self.repository.delete(task_id)
            except PersistenceError as e:
                get_logger().warning("failed to delete task %s: %s", task_id, e)

        get_logger().info("task deleted: %s", task_id)
        return True

    def completed_today(self, now: datetime | None = None) -> list[Task]:
        """Tasks completed on the current local calendar day.

        Args:
            now: Reference time; the day is taken in its timezone.
                Defaults to the system's local time.

        Returns:
            Tasks completed today, most recently updated first
        """
        if now is None:
            now = datetime.now().astimezone()
        elif now.tzinfo is None:
            now = now.astimezone()
        today = now.date()
        done = [
            task
            for task in self.all()
            if task.completed_at is not None
            and task.completed_at.astimezone(now.tzinfo).date() == today
        ]
        return sorted(done, key=lambda t: t.updated_at, reverse=True)

    def _now(self, previous: datetime | None = None) -> datetime:
        """Current time, never earlier than ``previous``."""
        now = self._clock()
        if previous is not None and previous > now:
            return previous
        return now

    def _replace(self, task: Task, **changes) -> Task:
        """Store a re-validated copy of ``task`` with ``changes`` applied."""
        updated = Task.model_validate({**task.model_dump(), **changes})
        self._tasks[updated.id] = updated
        self._persist(updated)
        return updated

    def _persist(self, task: Task) -> None:
        try:
            self.repository.save(task)
        except PersistenceError as e:
            get_logger().warning("failed to persist task %s: %s", task.id, e)
