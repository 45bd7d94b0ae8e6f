"""Delete command - Delete tasks."""

import typer

from selectdo.services.bootstrap import build_store
from selectdo.utils.task_helpers import resolve_task_id
from selectdo.utils.ui.console import get_console
from selectdo.utils.ui.formatters import format_info, format_success

from .decorators import command_wrapper

app = typer.Typer(help="Delete tasks")
console = get_console()


@app.command("delete")
@command_wrapper
def delete_task(
    task_id: str = typer.Argument(..., help="Task ID or suffix"),
    force: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete a task."""
    store = build_store()

    resolved_id = resolve_task_id(store, task_id)
    task = store.get(resolved_id)

    if not force:
        confirm = typer.confirm(f"Delete task '{task.title}'?")
        if not confirm:
            format_info("Cancelled")
            raise typer.Exit(0)

    store.delete(resolved_id)
    format_success(f"Task deleted: {task.title}")
