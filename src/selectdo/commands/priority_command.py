"""Command 'priority' of selectdo"""

import typer

from selectdo.services.bootstrap import build_store
from selectdo.utils.task_helpers import resolve_task_id
from selectdo.utils.ui.formatters import format_success, short_title

from .decorators import command_wrapper

app = typer.Typer()


@app.command("priority")
@command_wrapper
def toggle_priority(
    task_id: str = typer.Argument(..., help="Task ID or suffix"),
) -> None:
    """Toggle the priority flag of a task."""
    store = build_store()

    task = store.toggle_priority(resolve_task_id(store, task_id))
    state = "★ Prioritized" if task.is_priority else "☆ Unprioritized"
    format_success(f"{state}: {short_title(task.title)}")
