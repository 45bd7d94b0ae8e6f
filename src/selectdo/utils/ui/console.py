"""Shared rich console and the selectdo color theme."""

from functools import lru_cache

from rich.console import Console
from rich.theme import Theme

SELECTDO_THEME = Theme(
    {
        "error": "bold red",
        "success": "bold green",
        "warning": "bold yellow",
        "info": "bold blue",
        "muted": "dim",
        "priority": "bold yellow",
        "minutes": "cyan",
        "energy": "yellow",
        "project": "blue",
        "tag": "yellow",
        "context": "cyan",
        "context.work": "blue",
        "context.personal": "magenta",
    }
)


@lru_cache(maxsize=2)
def get_console(highlight: bool = True) -> Console:
    """Get the shared Rich Console, styled with the selectdo theme."""
    return Console(highlight=highlight, theme=SELECTDO_THEME)


def context_style(context: str) -> str:
    """Theme style for a context label; contexts without their own color share one."""
    name = f"context.{context.lower()}"
    return name if name in SELECTDO_THEME.styles else "context"
