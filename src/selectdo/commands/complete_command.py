"""Command 'complete' of selectdo"""

from typing import Annotated

import typer
from rich.markup import escape

from selectdo.services.bootstrap import build_store
from selectdo.utils.task_helpers import resolve_task_id
from selectdo.utils.ui.console import get_console
from selectdo.utils.ui.formatters import format_success, short_title

from .decorators import command_wrapper

app = typer.Typer()
console = get_console()


@app.command("complete")
@command_wrapper
def complete_command(
    task_ids: Annotated[
        list[str], typer.Argument(help="Task ID(s) or suffix(es) - can specify multiple")
    ],
) -> None:
    """Mark one or more tasks as completed."""
    store = build_store()

    # Resolve everything first so a bad id completes nothing
    resolved_ids = [resolve_task_id(store, task_id) for task_id in task_ids]

    for task_id in resolved_ids:
        task = store.complete(task_id)
        format_success(f"✓ Completed: {short_title(task.title)}")

    if len(resolved_ids) == 1:
        console.print(f"[muted]To undo: selectdo reopen {escape(task_ids[0])}[/muted]")
