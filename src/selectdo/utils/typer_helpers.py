"""Typer helper utilities."""

from difflib import get_close_matches

import typer
from rich.markup import escape
from typer.core import TyperGroup

from selectdo.utils.ui.console import get_console


def suggest_commands(attempted: str, commands: list[str]) -> list[str]:
    """Commands that look like a typo of ``attempted``, closest first.

    Case is ignored, so "Find" suggests "find".
    """
    by_lower = {name.lower(): name for name in commands}
    matches = get_close_matches(attempted.lower(), list(by_lower), n=3, cutoff=0.6)
    return [by_lower[match] for match in matches]


class SuggestingGroup(TyperGroup):
    """Command group that answers an unknown command with close matches."""

    def resolve_command(self, ctx, args):
        try:
            return super().resolve_command(ctx, args)
        except Exception as e:
            if not args:
                raise
            visible = [
                name for name, command in self.commands.items() if not command.hidden
            ]
            suggestions = suggest_commands(args[0], visible)
            if not suggestions:
                raise

            console = get_console()
            console.print(
                f'[error]Error:[/error] unknown command "{escape(args[0])}" '
                f'for "{ctx.info_name}"'
            )
            console.print()
            console.print("[warning]Did you mean this?[/warning]")
            for suggestion in suggestions:
                console.print(f"        {suggestion}")
            raise typer.Exit(1) from e
