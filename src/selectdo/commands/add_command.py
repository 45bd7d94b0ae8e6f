"""Command 'add' of selectdo"""

from typing import Annotated

import typer

from selectdo.models import ENERGY_LEVELS
from selectdo.services.bootstrap import build_store
from selectdo.services.config_service import get_config_service
from selectdo.utils.exit_codes import ERROR_INVALID_ARGS
from selectdo.utils.ui.console import get_console
from selectdo.utils.ui.formatters import format_json, format_success, format_task_item

from .decorators import AppError, command_wrapper
from .options import require_choice, require_minutes

app = typer.Typer()
console = get_console()


@app.command("add")
@command_wrapper
def add(
    title: Annotated[str, typer.Argument(help="Task title")],
    context: Annotated[
        str | None, typer.Option("--context", "-c", help="Context (e.g. Work, Personal)")
    ] = None,
    kind: Annotated[
        str | None, typer.Option("--kind", "-k", help="Atomic, Standard or Progress")
    ] = None,
    minutes: Annotated[
        int | None,
        typer.Option(
            "--minutes", "-m", min=1, help="Estimated minutes (one of tasks.minute_options)"
        ),
    ] = None,
    priority: Annotated[
        bool, typer.Option("--priority", "-p", help="Mark as priority")
    ] = False,
    energy: Annotated[
        str | None, typer.Option("--energy", "-e", help="Energy level needed (Low, Medium, High)")
    ] = None,
    project: Annotated[str | None, typer.Option("--project", help="Project name")] = None,
    tag: Annotated[
        list[str] | None, typer.Option("--tag", "-t", help="Tag (repeatable)")
    ] = None,
    json_opt: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """
    Add a new task.

    Examples:
      selectdo add "Write report" -c Work -m 10 --priority
      selectdo add "Call mom" -m 5 -t family
    """
    tasks_config = get_config_service().config.tasks
    if kind is not None:
        kind = require_choice("kind", kind, tasks_config.kinds)
    if energy:
        energy = require_choice("energy", energy, ENERGY_LEVELS)
    if minutes is not None:
        minutes = require_minutes(minutes, tasks_config.minute_options)

    store = build_store()

    task = store.add(
        title,
        context or tasks_config.default_context,
        kind or tasks_config.default_kind,
        minutes or tasks_config.default_minutes,
        priority,
        energy=energy,
        project=project,
        tags=tag or [],
    )
    if task is None:
        raise AppError("Task title cannot be blank", ERROR_INVALID_ARGS)

    if json_opt:
        format_json(task.model_dump(mode="json"))
        return

    format_success("Task created")
    format_task_item(task)
