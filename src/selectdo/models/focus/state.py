"""Focus session state machine.

A focus session is a countdown bound to a snapshot of one task. The
controller moves through three states::

    IDLE --start--> RUNNING --tick (0 left) / stop / complete--> FINISHED --> IDLE

FINISHED is transient: every finishing call hands back a ``FocusOutcome``
and clears the session right away. Only ``complete`` writes back to the
task (through the task store); ``stop`` and expiry leave it open.
"""

from __future__ import annotations

import uuid
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import TYPE_CHECKING, Literal

from selectdo.errors import FocusSessionActiveError, FocusSessionError
from selectdo.models.core import Task
from selectdo.utils.logger import get_logger

if TYPE_CHECKING:
    from selectdo.services.task_store import TaskStore

ConflictPolicy = Literal["reject", "replace"]


class FocusState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    FINISHED = "finished"


class FinishReason(str, Enum):
    EXPIRED = "expired"
    COMPLETED = "completed"
    DISCARDED = "discarded"


@dataclass
class FocusSession:
    """Represents one running countdown."""

    task_id: str
    title: str
    minutes: int
    remaining_seconds: int
    started_at: datetime
    session_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    paused: bool = False

    @classmethod
    def from_task(cls, task: Task, started_at: datetime) -> FocusSession:
        """Snapshot a task; later edits to the task do not reach the session."""
        return cls(
            task_id=task.id,
            title=task.title,
            minutes=task.minutes,
            remaining_seconds=task.minutes * 60,
            started_at=started_at,
        )

    @property
    def total_seconds(self) -> int:
        return self.minutes * 60

    @property
    def elapsed_seconds(self) -> int:
        return max(0, self.total_seconds - self.remaining_seconds)

    @property
    def progress(self) -> float:
        """Fraction of the session already elapsed, 0.0 to 1.0."""
        if self.total_seconds == 0:
            return 0.0
        return self.elapsed_seconds / self.total_seconds

    def clock_text(self) -> str:
        """Remaining time as MM:SS."""
        mins, secs = divmod(self.remaining_seconds, 60)
        return f"{mins:02d}:{secs:02d}"


@dataclass(frozen=True)
class FocusOutcome:
    """How a session ended."""

    session: FocusSession
    reason: FinishReason
    finished_at: datetime
    completed_task: Task | None = None


class FocusSessionController:
    """Tracks the single active focus session.

    Ticks are delivered by an external timer (see ``Ticker``); a late tick
    never takes the countdown below zero.
    """

    def __init__(
        self,
        store: TaskStore,
        *,
        on_conflict: ConflictPolicy = "reject",
        clock: Callable[[], datetime] | None = None,
    ):
        """Initialize the controller.

        Args:
            store: Task store used to persist completion
            on_conflict: "reject" raises when a session is already running,
                "replace" discards it and starts the new one
            clock: Returns the current time (defaults to UTC now)
        """
        if on_conflict not in ("reject", "replace"):
            raise ValueError(f"Unknown conflict policy: {on_conflict}")
        self.store = store
        self.on_conflict = on_conflict
        self._clock = clock or (lambda: datetime.now(UTC))
        self._session: FocusSession | None = None
        self._state = FocusState.IDLE
        self._listeners: list[Callable[[FocusOutcome], None]] = []
        self.last_outcome: FocusOutcome | None = None

    @property
    def state(self) -> FocusState:
        return self._state

    @property
    def session(self) -> FocusSession | None:
        return self._session

    @property
    def is_running(self) -> bool:
        return self._state == FocusState.RUNNING

    def on_finish(self, callback: Callable[[FocusOutcome], None]) -> None:
        """Register a callback invoked with every outcome."""
        self._listeners.append(callback)

    def start(self, task: Task) -> FocusSession:
        """Start a session for an open task.

        Raises:
            FocusSessionError: If the task is already completed
            FocusSessionActiveError: If a session is running and the policy is "reject"
        """
        if task.is_completed:
            raise FocusSessionError(f"Task is already completed: {task.title}")

        if self._session is not None:
            if self.on_conflict == "reject":
                raise FocusSessionActiveError(self._session.title)
            get_logger().warning(
                "focus session replaced: %s -> %s", self._session.task_id, task.id
            )
            self._finish(FinishReason.DISCARDED)

        self._session = FocusSession.from_task(task, started_at=self._clock())
        self._state = FocusState.RUNNING
        get_logger().info(
            "focus session started: %s (%d min)", task.id, task.minutes
        )
        return self._session

    def tick(self) -> FocusOutcome | None:
        """Count down one second.

        Returns:
            The outcome when this tick finished the session, otherwise None
        """
        session = self._session
        if session is None or session.paused:
            return None

        session.remaining_seconds = max(0, session.remaining_seconds - 1)
        if session.remaining_seconds == 0:
            return self._finish(FinishReason.EXPIRED)
        return None

    def pause(self) -> None:
        self._require_session().paused = True

    def resume(self) -> None:
        self._require_session().paused = False

    def stop(self) -> FocusOutcome:
        """Discard the running session without touching the task."""
        self._require_session()
        return self._finish(FinishReason.DISCARDED)

    def complete(self) -> FocusOutcome:
        """Finish the session and mark its task completed."""
        session = self._require_session()
        completed = self.store.complete(session.task_id)
        if completed is None:
            get_logger().warning(
                "focus completion for missing task: %s", session.task_id
            )
        return self._finish(FinishReason.COMPLETED, completed_task=completed)

    def _require_session(self) -> FocusSession:
        if self._session is None:
            raise FocusSessionError("No focus session is running")
        return self._session

    def _finish(
        self, reason: FinishReason, completed_task: Task | None = None
    ) -> FocusOutcome:
        assert self._session is not None
        self._state = FocusState.FINISHED
        outcome = FocusOutcome(
            session=self._session,
            reason=reason,
            finished_at=self._clock(),
            completed_task=completed_task,
        )
        self.last_outcome = outcome
        get_logger().info(
            "focus session finished: %s (%s)", self._session.task_id, reason.value
        )
        try:
            for listener in list(self._listeners):
                listener(outcome)
        finally:
            self._session = None
            self._state = FocusState.IDLE
        return outcome
