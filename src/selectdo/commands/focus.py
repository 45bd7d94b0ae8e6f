"""Focus mode commands with a live countdown timer."""

import typer
from rich.align import Align
from rich.console import Group
from rich.live import Live
from rich.markup import escape
from rich.panel import Panel
from rich.progress_bar import ProgressBar
from rich.prompt import Confirm, Prompt
from rich.text import Text

from selectdo.models.focus import (
    FinishReason,
    FocusOutcome,
    FocusSession,
    FocusSessionController,
    Ticker,
)
from selectdo.services.bootstrap import build_focus_controller, build_store
from selectdo.utils.task_helpers import resolve_task_id
from selectdo.utils.ui.console import get_console
from selectdo.utils.ui.formatters import format_success, format_warning

from .decorators import command_wrapper

console = get_console()
app = typer.Typer(help="Focus mode with a countdown timer")


def render_session(session: FocusSession) -> Panel:
    """Build the timer panel for the current state of a session."""
    remaining = session.remaining_seconds
    if session.paused:
        timer_color = "yellow"
    elif remaining < 60:
        timer_color = "red"
    elif remaining < 300:
        timer_color = "yellow"
    else:
        timer_color = "cyan"

    components = [
        Text(session.title[:50], style="bold white", justify="center"),
        Text(""),
        Text(session.clock_text(), style=f"bold {timer_color}", justify="center"),
        Text(""),
        Align.center(
            ProgressBar(total=session.total_seconds, completed=session.elapsed_seconds, width=40)
        ),
        Text(f"{int(session.progress * 100)}%", style="dim", justify="center"),
    ]
    if session.paused:
        components.append(Text("PAUSED", style="yellow dim", justify="center"))

    return Panel(
        Group(*components),
        title="Focus",
        subtitle="Ctrl+C to complete, discard or pause",
        border_style=timer_color,
        padding=(1, 2),
    )


def run_countdown(controller: FocusSessionController, ticker: Ticker) -> None:
    """Tick the controller until its session finishes.

    KeyboardInterrupt propagates to the caller with the session still running.
    """
    session = controller.session
    with Live(
        render_session(session),
        console=console,
        refresh_per_second=4,
        transient=True,
    ) as live:

        def on_tick():
            controller.tick()
            live.update(render_session(session))

        ticker.run(on_tick, lambda: controller.is_running)


def show_completion_message(outcome: FocusOutcome) -> None:
    """Show a message after the timer ran out or the task was completed."""
    session = outcome.session
    elapsed_minutes = session.elapsed_seconds // 60

    panel = Panel(
        f"""[bold green]Focus Session Complete![/bold green]

Task: {escape(session.title)}
Duration: {session.minutes} minutes
Time focused: {elapsed_minutes} minutes""",
        border_style="green",
        padding=(1, 2),
    )
    console.print(panel)


def show_stopped_message(outcome: FocusOutcome) -> None:
    """Show a message when a session is discarded early."""
    session = outcome.session

    panel = Panel(
        f"""[yellow]Session Discarded[/yellow]

Task: {escape(session.title)}
Time focused: {session.elapsed_seconds // 60} minutes
Remaining: {session.clock_text()}""",
        border_style="yellow",
        padding=(1, 2),
    )
    console.print(panel)


@app.command("start")
@command_wrapper
def start_focus(
    task_id: str = typer.Argument(..., help="Task ID or suffix to focus on"),
) -> None:
    """Start a focus session on a task, for the task's estimated minutes."""
    store = build_store()
    controller = build_focus_controller(store)

    task = store.get(resolve_task_id(store, task_id))
    session = controller.start(task)

    console.print("\n[bold green]Focus session started[/bold green]")
    console.print(f"Task: {escape(session.title)}")
    console.print(f"Duration: {session.minutes} minutes\n")

    while True:
        try:
            run_countdown(controller, Ticker())
        except KeyboardInterrupt:
            if not controller.is_running:
                break
            controller.pause()
            choice = Prompt.ask(
                "\n[bold]Paused.[/bold] [c]omplete, [d]iscard or [r]esume",
                choices=["c", "d", "r"],
                default="r",
            )
            if choice == "r":
                controller.resume()
                continue
            if choice == "c":
                controller.complete()
            else:
                controller.stop()
        break

    outcome = controller.last_outcome
    if outcome.reason == FinishReason.DISCARDED:
        show_stopped_message(outcome)
        return

    show_completion_message(outcome)
    if outcome.reason == FinishReason.COMPLETED:
        format_success("✓ Task marked as completed")
        return

    if Confirm.ask("\nDid you complete this task?", default=False):
        if store.complete(session.task_id) is None:
            format_warning("Task no longer exists")
        else:
            format_success("✓ Task marked as completed")
