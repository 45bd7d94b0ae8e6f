"""Command 'find' of selectdo - pick what to do next."""

from typing import Annotated

import typer
from rich.prompt import Prompt

from selectdo.models import ENERGY_LEVELS, ShuffleMode, TaskFilterSpec
from selectdo.services.bootstrap import (
    build_filter_engine,
    build_store,
    default_filter_spec,
)
from selectdo.services.filter_engine import FilterEngine
from selectdo.services.task_store import TaskStore
from selectdo.utils.ui.console import get_console
from selectdo.utils.ui.formatters import format_json, format_task_list

from .decorators import command_wrapper
from .options import require_choice

app = typer.Typer()
console = get_console()


def _resolve_shuffle(engine: FilterEngine, shuffle: bool | None) -> FilterEngine:
    if shuffle is None:
        return engine
    if not shuffle:
        return FilterEngine(shuffle=ShuffleMode.OFF)
    if engine.shuffle == ShuffleMode.OFF:
        return FilterEngine(shuffle=ShuffleMode.ALWAYS)
    return engine


def _show(
    store: TaskStore,
    engine: FilterEngine,
    spec: TaskFilterSpec,
    limit: int | None,
    json_opt: bool,
) -> None:
    all_tasks = store.all()
    tasks = engine.apply(all_tasks, spec)
    if limit:
        tasks = tasks[:limit]

    if json_opt:
        format_json([t.model_dump(mode="json") for t in tasks])
        return

    bound = "any time" if spec.selected_minutes is None else f"≤ {spec.selected_minutes} min"
    format_task_list(
        tasks,
        f"{spec.active_context} • {bound}",
        all_task_ids=[t.id for t in all_tasks],
    )


@app.command("find")
@command_wrapper
def find(
    context: Annotated[
        str | None, typer.Option("--context", "-c", help="Active context")
    ] = None,
    minutes: Annotated[
        int | None, typer.Option("--minutes", "-m", min=1, help="Time available")
    ] = None,
    any_time: Annotated[
        bool, typer.Option("--any-time", help="Ignore task length")
    ] = False,
    priority_only: Annotated[
        bool, typer.Option("--priority-only", "-p", help="Only priority tasks")
    ] = False,
    energy: Annotated[
        list[str] | None,
        typer.Option("--energy", "-e", help="Allowed energy level (Low, Medium, High)"),
    ] = None,
    project: Annotated[
        list[str] | None, typer.Option("--project", help="Allowed project")
    ] = None,
    tag: Annotated[
        list[str] | None, typer.Option("--tag", "-t", help="Required tag")
    ] = None,
    shuffle: Annotated[
        bool | None,
        typer.Option("--shuffle/--no-shuffle", help="Override the configured shuffle"),
    ] = None,
    limit: Annotated[
        int | None, typer.Option("--limit", "-n", min=1, help="Show at most N tasks")
    ] = None,
    interactive: Annotated[
        bool, typer.Option("--interactive", "-i", help="Reshuffle on demand")
    ] = False,
    json_opt: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """
    Show open tasks that fit the moment.

    Examples:
      selectdo find -c Work -m 10
      selectdo find --any-time --priority-only
      selectdo find -t deep -t writing -i
    """
    energy = [require_choice("energy", e, ENERGY_LEVELS) for e in energy or ()]
    store = build_store()
    engine = _resolve_shuffle(build_filter_engine(), shuffle)

    spec = default_filter_spec()
    updates = {
        "priority_only": priority_only,
        "energy": energy or (),
        "project": project or (),
        "tags": tag or (),
        "active_context": store.normalize_context(context or spec.active_context),
    }
    if any_time:
        updates["selected_minutes"] = None
    elif minutes:
        updates["selected_minutes"] = minutes
    spec = TaskFilterSpec.model_validate({**spec.model_dump(), **updates})

    _show(store, engine, spec, limit, json_opt)
    if not interactive or json_opt:
        return

    while Prompt.ask("[dim]r = reshuffle, q = quit[/dim]", choices=["r", "q"], default="q") == "r":
        spec = spec.reshuffled()
        _show(store, engine, spec, limit, json_opt)
