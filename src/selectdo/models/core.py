"""Task data models."""

from __future__ import annotations

import uuid
from collections.abc import Iterable
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_CONTEXTS = ("Work", "Personal")
DEFAULT_CONTEXT = "Personal"
TASK_KINDS = ("Atomic", "Standard", "Progress")
DEFAULT_KIND = "Atomic"
ENERGY_LEVELS = ("Low", "Medium", "High")
MINUTE_OPTIONS = (5, 10, 15, 20, 25, 30, 45, 60)


def normalize_tags(tags: Iterable[str] | None) -> list[str]:
    """Trim tags, drop blanks and case-insensitive duplicates.

    The first spelling of a tag wins and the original order is kept.

    Args:
        tags: Raw tag values

    Returns:
        Ordered list of unique, trimmed tags
    """
    if not tags:
        return []
    if isinstance(tags, str):
        tags = tags.split(",")

    seen: set[str] = set()
    result = []
    for raw in tags:
        tag = str(raw).strip()
        key = tag.lower()
        if not tag or key in seen:
            continue
        seen.add(key)
        result.append(tag)
    return result


def _clean_optional_text(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


class Task(BaseModel):
    """Task record.

    Attributes:
        id: Unique identifier, never changes after creation
        title: Trimmed, non-blank task title
        context: Life area the task belongs to (e.g. "Work", "Personal")
        kind: Task shape ("Atomic", "Standard", "Progress"), informational only
        minutes: Estimated duration in minutes
        is_priority: Priority flag
        completed_at: Completion timestamp, None while the task is open
        updated_at: Timestamp of the last mutation
        created_at: Creation timestamp
        energy: Optional energy level needed for the task
        project: Optional project name
        tags: Ordered set of tags
    """

    model_config = ConfigDict(validate_assignment=True)

    id: str
    title: str
    context: str = DEFAULT_CONTEXT
    kind: str = DEFAULT_KIND
    minutes: int = Field(default=15, ge=1)
    is_priority: bool = False
    completed_at: datetime | None = None
    updated_at: datetime
    created_at: datetime
    energy: str | None = None
    project: str | None = None
    tags: list[str] = Field(default_factory=list)

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        """Reject blank titles."""
        v = v.strip()
        if not v:
            raise ValueError("title cannot be blank")
        return v

    @field_validator("energy", "project")
    @classmethod
    def clean_optional_text(cls, v: str | None) -> str | None:
        return _clean_optional_text(v)

    @field_validator("tags", mode="before")
    @classmethod
    def clean_tags(cls, v):
        return normalize_tags(v)

    @property
    def is_completed(self) -> bool:
        return self.completed_at is not None


class TaskCreate(BaseModel):
    """Model for creating a new task.

    Attributes:
        title: Task title (required)
        context: Life area label
        kind: Task shape
        minutes: Estimated duration in minutes
        is_priority: Priority flag
        energy: Optional energy level
        project: Optional project name
        tags: Tags, normalized on write
    """

    title: str
    context: str = DEFAULT_CONTEXT
    kind: str = DEFAULT_KIND
    minutes: int = Field(default=15, ge=1)
    is_priority: bool = False
    energy: str | None = None
    project: str | None = None
    tags: list[str] = Field(default_factory=list)


class TaskUpdate(BaseModel):
    """Model for editing an existing task.

    All fields are optional - only provided fields will be updated.
    """

    title: str | None = None
    context: str | None = None
    kind: str | None = None
    minutes: int | None = Field(default=None, ge=1)
    is_priority: bool | None = None
    energy: str | None = None
    project: str | None = None
    tags: list[str] | None = None


class TaskFilterSpec(BaseModel):
    """Filter configuration for picking the next task.

    Attributes:
        active_context: Only tasks in this context are shown
        selected_minutes: Upper bound on task minutes, None means any length
        priority_only: Only priority tasks are shown
        energy: Allowed energy levels, empty means unrestricted
        project: Allowed projects, empty means unrestricted
        tags: Tags a task must ALL carry (case-insensitive), empty means unrestricted
        reshuffle_token: Opaque token, replaced on every reshuffle request
    """

    model_config = ConfigDict(frozen=True)

    active_context: str = DEFAULT_CONTEXT
    selected_minutes: int | None = Field(default=None, ge=1)
    priority_only: bool = False
    energy: frozenset[str] = frozenset()
    project: frozenset[str] = frozenset()
    tags: frozenset[str] = frozenset()
    reshuffle_token: str = Field(default_factory=lambda: str(uuid.uuid4()))

    @field_validator("energy", "project", mode="before")
    @classmethod
    def clean_values(cls, v):
        if not v:
            return frozenset()
        if isinstance(v, str):
            v = [v]
        return frozenset(item.strip() for item in v if item and item.strip())

    @field_validator("tags", mode="before")
    @classmethod
    def clean_required_tags(cls, v):
        if not v:
            return frozenset()
        if isinstance(v, str):
            v = v.split(",")
        return frozenset(t.strip().lower() for t in v if t and t.strip())

    def reshuffled(self) -> TaskFilterSpec:
        """Return a copy of this spec with a fresh reshuffle token."""
        return self.model_copy(update={"reshuffle_token": str(uuid.uuid4())})
