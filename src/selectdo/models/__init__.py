"""Select + Do domain models.

This package contains the Pydantic models that represent the core domain
entities of the application, plus the focus session state machine.
"""

from .config_models import AppConfig, ShuffleMode
from .core import (
    DEFAULT_CONTEXT,
    DEFAULT_CONTEXTS,
    DEFAULT_KIND,
    ENERGY_LEVELS,
    MINUTE_OPTIONS,
    TASK_KINDS,
    Task,
    TaskCreate,
    TaskFilterSpec,
    TaskUpdate,
    normalize_tags,
)

__all__ = [
    # Task models
    "Task",
    "TaskCreate",
    "TaskUpdate",
    "TaskFilterSpec",
    "normalize_tags",
    # Vocabulary
    "DEFAULT_CONTEXT",
    "DEFAULT_CONTEXTS",
    "DEFAULT_KIND",
    "ENERGY_LEVELS",
    "MINUTE_OPTIONS",
    "TASK_KINDS",
    # Config models
    "AppConfig",
    "ShuffleMode",
]
