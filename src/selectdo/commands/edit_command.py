"""Command 'edit' of selectdo - edit a task via flags."""

from __future__ import annotations

from typing import Annotated

import typer

from selectdo.models import ENERGY_LEVELS, TaskUpdate
from selectdo.services.bootstrap import build_store
from selectdo.services.config_service import get_config_service
from selectdo.utils.exit_codes import ERROR_INVALID_ARGS
from selectdo.utils.task_helpers import resolve_task_id
from selectdo.utils.ui.console import get_console
from selectdo.utils.ui.formatters import format_info, format_success, format_task_details

from .decorators import AppError, command_wrapper
from .options import require_choice, require_minutes

app = typer.Typer()
console = get_console()


@app.command("edit")
@command_wrapper
def edit_task(
    task_id: Annotated[str, typer.Argument(help="Task ID or suffix")],
    title: Annotated[str | None, typer.Option("--title", help="New title")] = None,
    context: Annotated[
        str | None, typer.Option("--context", "-c", help="New context")
    ] = None,
    kind: Annotated[str | None, typer.Option("--kind", "-k", help="New kind")] = None,
    minutes: Annotated[
        int | None, typer.Option("--minutes", "-m", min=1, help="New estimate")
    ] = None,
    priority: Annotated[
        bool | None,
        typer.Option("--priority/--no-priority", help="Set or clear the priority flag"),
    ] = None,
    energy: Annotated[
        str | None, typer.Option("--energy", "-e", help="Energy level ('' clears)")
    ] = None,
    project: Annotated[
        str | None, typer.Option("--project", help="Project name ('' clears)")
    ] = None,
    tag: Annotated[
        list[str] | None, typer.Option("--tag", "-t", help="Replace tags (repeatable)")
    ] = None,
    clear_tags: Annotated[
        bool, typer.Option("--clear-tags", help="Remove all tags")
    ] = False,
) -> None:
    """Edit fields of an existing task. Only the given fields change."""
    tasks_config = get_config_service().config.tasks
    if kind is not None:
        kind = require_choice("kind", kind, tasks_config.kinds)
    if energy:
        energy = require_choice("energy", energy, ENERGY_LEVELS)
    if minutes is not None:
        minutes = require_minutes(minutes, tasks_config.minute_options)

    store = build_store()
    resolved_id = resolve_task_id(store, task_id)

    changes = {
        "title": title,
        "context": context,
        "kind": kind,
        "minutes": minutes,
        "is_priority": priority,
        "energy": energy,
        "project": project,
        "tags": tag,
    }
    changes = {key: value for key, value in changes.items() if value is not None}
    if clear_tags:
        changes["tags"] = []

    if not changes:
        format_info("Nothing to change")
        return

    task = store.edit(resolved_id, TaskUpdate(**changes))
    if task is None:
        raise AppError("Task title cannot be blank", ERROR_INVALID_ARGS)

    format_success("Task updated")
    format_task_details(task)
