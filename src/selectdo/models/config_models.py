"""Configuration models for Select + Do."""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator

from .core import (
    DEFAULT_CONTEXT,
    DEFAULT_CONTEXTS,
    DEFAULT_KIND,
    MINUTE_OPTIONS,
    TASK_KINDS,
)


class ShuffleMode(str, Enum):
    """How the find list is reordered after sorting.

    ALWAYS reshuffles on every call, PER_TOKEN only when the filter's
    reshuffle token changes, OFF keeps the most-recently-touched order.
    """

    ALWAYS = "always"
    PER_TOKEN = "per_token"
    OFF = "off"


class StorageConfig(BaseModel):
    """Storage configuration."""

    db_path: str | None = Field(
        default=None, description="SQLite database path (default: user data dir)"
    )


class TasksConfig(BaseModel):
    """Task vocabulary configuration."""

    contexts: list[str] = Field(default_factory=lambda: list(DEFAULT_CONTEXTS))
    default_context: str = Field(default=DEFAULT_CONTEXT)
    kinds: list[str] = Field(default_factory=lambda: list(TASK_KINDS))
    default_kind: str = Field(default=DEFAULT_KIND)
    minute_options: list[int] = Field(default_factory=lambda: list(MINUTE_OPTIONS))
    default_minutes: int = Field(default=15, ge=1)

    @field_validator("contexts")
    @classmethod
    def validate_contexts(cls, v: list[str]) -> list[str]:
        cleaned = [c.strip() for c in v if c and c.strip()]
        if not cleaned:
            raise ValueError("contexts cannot be empty")
        return cleaned

    @field_validator("kinds")
    @classmethod
    def validate_kinds(cls, v: list[str]) -> list[str]:
        cleaned = [k.strip() for k in v if k and k.strip()]
        if not cleaned:
            raise ValueError("kinds cannot be empty")
        return cleaned

    @field_validator("minute_options")
    @classmethod
    def validate_minute_options(cls, v: list[int]) -> list[int]:
        if not v or any(m < 1 for m in v):
            raise ValueError("minute_options must be positive numbers")
        return sorted(set(v))

    @model_validator(mode="after")
    def defaults_are_known(self) -> TasksConfig:
        if self.default_context not in self.contexts:
            raise ValueError(
                f"default_context '{self.default_context}' is not one of {self.contexts}"
            )
        if self.default_kind not in self.kinds:
            raise ValueError(
                f"default_kind '{self.default_kind}' is not one of {self.kinds}"
            )
        return self


class FindConfig(BaseModel):
    """Defaults for the find screen."""

    active_context: str = Field(default=DEFAULT_CONTEXT)
    selected_minutes: int | None = Field(default=15, ge=1)
    shuffle: ShuffleMode = Field(default=ShuffleMode.ALWAYS)


class FocusConfig(BaseModel):
    """Focus session configuration."""

    on_conflict: Literal["reject", "replace"] = Field(
        default="reject",
        description="What 'start' does while another session is running",
    )


class FeedbackConfig(BaseModel):
    """Feedback (bell/haptics) configuration."""

    enabled: bool = Field(default=True)


class LoggingConfig(BaseModel):
    """Log file configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="DEBUG")
    dir: str | None = Field(
        default=None, description="Log directory (default: user log dir)"
    )

    @field_validator("level", mode="before")
    @classmethod
    def upper_level(cls, v):
        return v.upper() if isinstance(v, str) else v


class AppConfig(BaseModel):
    """Main Select + Do configuration."""

    storage: StorageConfig = Field(default_factory=StorageConfig)
    tasks: TasksConfig = Field(default_factory=TasksConfig)
    find: FindConfig = Field(default_factory=FindConfig)
    focus: FocusConfig = Field(default_factory=FocusConfig)
    feedback: FeedbackConfig = Field(default_factory=FeedbackConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
