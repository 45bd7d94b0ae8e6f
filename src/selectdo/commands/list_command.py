"""Command 'list' of selectdo"""

from typing import Annotated

import typer

from selectdo.services.bootstrap import build_store
from selectdo.utils.ui.formatters import format_json, format_task_list

from .decorators import command_wrapper

app = typer.Typer()


@app.command("list")
@command_wrapper
def list_tasks(
    show_all: Annotated[
        bool, typer.Option("--all", "-a", help="Include completed tasks")
    ] = False,
    context: Annotated[
        str | None, typer.Option("--context", "-c", help="Only this context")
    ] = None,
    json_opt: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """List tasks, most recently touched first."""
    store = build_store()
    all_tasks = store.all()

    tasks = sorted(all_tasks, key=lambda t: t.updated_at, reverse=True)
    if not show_all:
        tasks = [t for t in tasks if not t.is_completed]
    if context:
        tasks = [t for t in tasks if t.context == store.normalize_context(context)]

    if json_opt:
        format_json([t.model_dump(mode="json") for t in tasks])
        return

    format_task_list(
        tasks,
        "All tasks" if show_all else "Open tasks",
        all_task_ids=[t.id for t in all_tasks],
    )
