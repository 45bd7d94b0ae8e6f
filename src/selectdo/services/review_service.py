"""Review service - insights about what got done today."""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime

from selectdo.models import DEFAULT_CONTEXTS, Task
from selectdo.services.task_store import TaskStore

NO_VALUE = "—"

# (exclusive upper bound in minutes, label); anything above is "Long"
TIME_BRACKETS = ((20, "Quick"), (40, "Standard"))


@dataclass(frozen=True)
class ReviewSummary:
    """Completed-today summary."""

    completed: list[Task]
    total_minutes: int
    most_productive_context: str
    preferred_time_bracket: str

    @property
    def count(self) -> int:
        return len(self.completed)


def most_productive_context(
    tasks: list[Task], contexts: Sequence[str] = DEFAULT_CONTEXTS
) -> str:
    """Context with the most completions.

    Work wins a tie; other ties go to the context listed first.
    """
    counts = Counter(t.context for t in tasks if t.context in contexts)
    if not counts:
        return NO_VALUE
    best = max(counts.values())
    leaders = [c for c in contexts if counts[c] == best]
    return "Work" if "Work" in leaders else leaders[0]


def preferred_time_bracket(tasks: list[Task]) -> str:
    """Bracket of the average (integer) task length."""
    if not tasks:
        return NO_VALUE
    average = sum(t.minutes for t in tasks) // len(tasks)
    for upper, label in TIME_BRACKETS:
        if average < upper:
            return label
    return "Long"


def build_review(store: TaskStore, now: datetime | None = None) -> ReviewSummary:
    """Summarize the tasks completed today."""
    done = store.completed_today(now)
    return ReviewSummary(
        completed=done,
        total_minutes=sum(t.minutes for t in done),
        most_productive_context=most_productive_context(done, store.contexts),
        preferred_time_bracket=preferred_time_bracket(done),
    )
