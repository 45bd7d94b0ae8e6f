"""Reopen command - Reopen completed tasks."""

import typer

from selectdo.services.bootstrap import build_store
from selectdo.utils.task_helpers import resolve_task_id
from selectdo.utils.ui.formatters import format_info, format_success, short_title

from .decorators import command_wrapper

app = typer.Typer(help="Reopen completed tasks")


@app.command("reopen")
@command_wrapper
def reopen_task(
    task_id: str = typer.Argument(..., help="Task ID or suffix"),
) -> None:
    """Mark a completed task as not completed."""
    store = build_store()

    resolved_id = resolve_task_id(store, task_id)
    if not store.get(resolved_id).is_completed:
        format_info("Task is not completed")
        return

    task = store.reopen(resolved_id)
    format_success(f"↩ Reopened: {short_title(task.title)}")
