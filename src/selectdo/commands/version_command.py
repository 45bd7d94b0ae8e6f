"""Command 'version' of selectdo"""

import typer

from selectdo import __version__
from selectdo.utils.ui.console import get_console

app = typer.Typer()
console = get_console(highlight=False)


@app.command()
def version() -> None:
    """Show version information"""
    console.print(__version__)
