"""Main entry point for the Select + Do CLI."""

import typer

from selectdo.commands import (
    add_command,
    complete_command,
    config,
    delete_command,
    edit_command,
    find_command,
    focus,
    list_command,
    priority_command,
    reopen_command,
    review_command,
    version_command,
)
from selectdo.utils.typer_helpers import SuggestingGroup

app = typer.Typer(
    name="selectdo",
    cls=SuggestingGroup,
    help="Select + Do: pick the next task that fits your time, then do it",
    no_args_is_help=True,
)

# Single-command modules are merged into the top level
for command_module in (
    add_command,
    find_command,
    list_command,
    complete_command,
    reopen_command,
    priority_command,
    edit_command,
    delete_command,
    review_command,
    version_command,
):
    app.add_typer(command_module.app)

app.add_typer(focus.app, name="focus", help="Focus session with a countdown timer")
app.add_typer(config.app, name="config", help="Configuration management")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
