"""Output formatters for tasks, messages and review summaries."""

import json
from datetime import datetime
from typing import Any

from rich.markup import escape
from rich.table import Table
from rich.text import Text

from selectdo.models import Task

from .console import context_style, get_console

console = get_console()

PRIORITY_ICON = "★"
STATUS_ICONS = {"open": "○", "done": "✓"}


def calculate_unique_suffixes(task_ids: list[str]) -> dict[str, int]:
    """
    Calculate minimum unique suffix length for each task ID.

    Starts from length 1 and grows until unique among all IDs.

    Args:
        task_ids: List of full task IDs

    Returns:
        Dict mapping task_id -> required suffix length
    """
    if not task_ids:
        return {}

    result = {}

    for task_id in task_ids:
        for length in range(1, len(task_id) + 1):
            suffix = task_id[-length:]
            conflicts = [
                tid for tid in task_ids if tid != task_id and tid.endswith(suffix)
            ]
            if not conflicts:
                result[task_id] = length
                break
        else:
            result[task_id] = len(task_id)

    return result


def format_error(message: str) -> None:
    """Format and display an error message."""
    console.print(f"[error]Error:[/error] {escape(message)}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    console.print(f"[success]Success:[/success] {escape(message)}")


def format_warning(message: str) -> None:
    """Format and display a warning message."""
    console.print(f"[warning]Warning:[/warning] {escape(message)}")


def format_info(message: str) -> None:
    """Format and display an info message."""
    console.print(f"[info]Info:[/info] {escape(message)}")


def format_json(data: Any) -> None:
    """Print data as JSON."""
    print(json.dumps(data, indent=2, default=str, ensure_ascii=False))


def format_time(value: datetime | None) -> str:
    """Local time for display, or "-"."""
    if value is None:
        return "-"
    return value.astimezone().strftime("%b %d, %H:%M")


def short_title(title: str, width: int = 60) -> str:
    if len(title) > width:
        return title[: width - 3] + "..."
    return title


def format_task_item(
    task: Task,
    suffix_map: dict[str, int] | None = None,
    indent: str = "  ",
) -> None:
    """Format a single task as a one-line entry with a metadata line."""
    status_icon = STATUS_ICONS["done"] if task.is_completed else STATUS_ICONS["open"]

    line = Text(indent)
    line.append(f"{status_icon} ", style="green" if task.is_completed else "")
    if task.is_priority:
        line.append(f"{PRIORITY_ICON} ", style="priority")
    line.append(task.title, style="dim strike" if task.is_completed else "bold")
    console.print(line)

    meta: list[tuple[str, str]] = [
        (task.context, context_style(task.context)),
        (f"{task.minutes} min", "minutes"),
        (task.kind, ""),
    ]
    if task.energy:
        meta.append((f"{task.energy} energy", "energy"))
    if task.project:
        meta.append((f"#{task.project}", "project"))
    if task.tags:
        meta.append((" ".join(f"" for t in task.tags), "tag"))

    length = (suffix_map or {}).get(task.id, len(task.id))
    meta.append((f"#{task.id[-length:]}", "dim"))

    meta_line = Text(f"{indent}   └─ ", style="dim")
    for i, (text, style) in enumerate(meta):
        if i > 0:
            meta_line.append(" • ", style="dim")
        meta_line.append(text, style=style)
    console.print(meta_line)


def format_task_list(
    tasks: list[Task],
    title: str,
    all_task_ids: list[str] | None = None,
) -> None:
    """Format a list of tasks under a header line.

    Suffixes are computed against ``all_task_ids`` so they stay unique
    across the whole collection, not only the displayed subset.
    """
    header = Text()
    header.append(f"{title} ", style="bold cyan")
    header.append(f"({len(tasks)})", style="dim")
    console.print(header)
    console.print()

    if not tasks:
        console.print("[yellow]No tasks found[/yellow]")
        return

    suffix_ids = all_task_ids if all_task_ids is not None else [t.id for t in tasks]
    suffix_map = calculate_unique_suffixes(suffix_ids)
    for task in tasks:
        format_task_item(task, suffix_map)
    console.print()


def format_task_details(task: Task) -> None:
    """Format a single task as key-value pairs."""
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="white")

    table.add_row("ID", task.id)
    table.add_row("Title", Text(task.title))
    table.add_row("Context", Text(task.context))
    table.add_row("Kind", Text(task.kind))
    table.add_row("Minutes", str(task.minutes))
    table.add_row("Priority", "✓" if task.is_priority else "✗")
    table.add_row("Energy", Text(task.energy or "-"))
    table.add_row("Project", Text(task.project or "-"))
    table.add_row("Tags", Text(", ".join(task.tags) or "-"))
    table.add_row("Completed", format_time(task.completed_at))
    table.add_row("Updated", format_time(task.updated_at))
    table.add_row("Created", format_time(task.created_at))

    console.print(table)
