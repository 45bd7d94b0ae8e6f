"""Command 'review' of selectdo - what got done today."""

import typer
from rich.markup import escape
from rich.panel import Panel

from selectdo.services.bootstrap import build_store
from selectdo.services.review_service import build_review
from selectdo.utils.ui.console import get_console
from selectdo.utils.ui.formatters import format_task_list

from .decorators import command_wrapper

app = typer.Typer()
console = get_console()


@app.command("review")
@command_wrapper
def review() -> None:
    """Show tasks completed today with a few insights."""
    store = build_store()
    summary = build_review(store)

    panel = Panel(
        f"""[bold green]Today's Review[/bold green]

Completed: {summary.count} task(s)
Focused time: {summary.total_minutes} minutes
Most productive context: {escape(summary.most_productive_context)}
Preferred time: {summary.preferred_time_bracket}""",
        border_style="green",
        padding=(1, 2),
    )
    console.print(panel)

    if summary.count:
        format_task_list(
            summary.completed,
            "Completed today",
            all_task_ids=[t.id for t in store.all()],
        )
