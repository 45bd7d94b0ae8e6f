"""Wiring - builds the store and its collaborators from configuration.

There is no process-wide store: every consumer gets an explicitly
constructed instance from these factories.
"""

from __future__ import annotations

from selectdo.adapters.sqlite import SqliteTaskRepository
from selectdo.models import TaskFilterSpec
from selectdo.models.focus import FocusSessionController
from selectdo.services.config_service import ConfigService, get_config_service
from selectdo.services.feedback import ConsoleFeedback, Feedback, NullFeedback
from selectdo.services.filter_engine import FilterEngine
from selectdo.services.task_store import TaskStore
from selectdo.utils.ui.console import get_console


def build_feedback(config_service: ConfigService) -> Feedback:
    if config_service.config.feedback.enabled:
        return ConsoleFeedback(get_console())
    return NullFeedback()


def build_store(config_service: ConfigService | None = None) -> TaskStore:
    """Create a TaskStore backed by the configured SQLite database and load it."""
    config_service = config_service or get_config_service()
    tasks_config = config_service.config.tasks
    store = TaskStore(
        SqliteTaskRepository(config_service.db_path),
        feedback=build_feedback(config_service),
        contexts=tasks_config.contexts,
        default_context=tasks_config.default_context,
        kinds=tasks_config.kinds,
        default_kind=tasks_config.default_kind,
    )
    store.load()
    return store


def build_filter_engine(config_service: ConfigService | None = None) -> FilterEngine:
    config_service = config_service or get_config_service()
    return FilterEngine(shuffle=config_service.config.find.shuffle)


def default_filter_spec(config_service: ConfigService | None = None) -> TaskFilterSpec:
    """Filter spec seeded from the find defaults in the config."""
    config_service = config_service or get_config_service()
    find = config_service.config.find
    return TaskFilterSpec(
        active_context=find.active_context,
        selected_minutes=find.selected_minutes,
    )


def build_focus_controller(
    store: TaskStore, config_service: ConfigService | None = None
) -> FocusSessionController:
    config_service = config_service or get_config_service()
    return FocusSessionController(
        store, on_conflict=config_service.config.focus.on_conflict
    )
