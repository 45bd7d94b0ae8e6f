"""Filter engine - derives the "what should I do next" list.

Everything here is recomputed from the full task collection on every call;
nothing is cached between calls. Stages run in a fixed order, each one
narrowing the previous result:

1. context equals the active context
2. open tasks only
3. minutes within the selected bound (if any)
4. priority only (if requested)
5. energy in the allowed set (if any)
6. project in the allowed set (if any)
7. task tags contain every required tag (case-insensitive)
8. most recently touched first
9. shuffle, according to the configured ``ShuffleMode``

The shuffle makes the result order non-deterministic under
``ShuffleMode.ALWAYS``; only membership is stable.
"""

from __future__ import annotations

import random
from collections.abc import Iterable

from selectdo.models import ShuffleMode, Task, TaskFilterSpec


def _matches_choice(value: str | None, allowed: frozenset[str]) -> bool:
    if not allowed:
        return True
    value = (value or "").strip()
    return bool(value) and value in allowed


def _matches_tags(tags: list[str], required: frozenset[str]) -> bool:
    if not required:
        return True
    task_tags = {t.strip().lower() for t in tags if t.strip()}
    return required <= task_tags


def select_candidates(tasks: Iterable[Task], spec: TaskFilterSpec) -> list[Task]:
    """Apply the filter stages and sort, without shuffling.

    Args:
        tasks: Full task collection
        spec: Filter configuration

    Returns:
        Matching tasks, most recently updated first
    """
    candidates = [t for t in tasks if t.context == spec.active_context]
    candidates = [t for t in candidates if t.completed_at is None]
    if spec.selected_minutes is not None:
        candidates = [t for t in candidates if t.minutes <= spec.selected_minutes]
    if spec.priority_only:
        candidates = [t for t in candidates if t.is_priority]
    candidates = [t for t in candidates if _matches_choice(t.energy, spec.energy)]
    candidates = [t for t in candidates if _matches_choice(t.project, spec.project)]
    candidates = [t for t in candidates if _matches_tags(t.tags, spec.tags)]

    return sorted(candidates, key=lambda t: t.updated_at, reverse=True)


class FilterEngine:
    """Produces the display list for a filter spec."""

    def __init__(
        self,
        shuffle: ShuffleMode = ShuffleMode.ALWAYS,
        rng: random.Random | None = None,
    ):
        """Initialize the engine.

        Args:
            shuffle: When the sorted list is reshuffled
            rng: Random source for ShuffleMode.ALWAYS (defaults to a fresh Random)
        """
        self.shuffle = ShuffleMode(shuffle)
        self._rng = rng or random.Random()

    def apply(self, tasks: Iterable[Task], spec: TaskFilterSpec) -> list[Task]:
        """Filter, sort and shuffle ``tasks``.

        Returns:
            Ordered list of matching tasks, possibly empty
        """
        result = select_candidates(tasks, spec)
        if len(result) < 2 or self.shuffle == ShuffleMode.OFF:
            return result

        if self.shuffle == ShuffleMode.PER_TOKEN:
            random.Random(spec.reshuffle_token).shuffle(result)
        else:
            self._rng.shuffle(result)
        return result
