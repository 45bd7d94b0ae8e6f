"""Configuration management commands."""

import json
from typing import Any

import typer
from rich.markup import escape

from selectdo.services.config_service import get_config_service
from selectdo.utils.exit_codes import ERROR_INVALID_ARGS, ERROR_NOT_FOUND
from selectdo.utils.logger import log_file_path
from selectdo.utils.ui.console import get_console
from selectdo.utils.ui.formatters import format_info, format_json, format_success

from .decorators import AppError, command_wrapper

app = typer.Typer(help="Configuration management commands")
console = get_console()


def parse_value(value: str) -> Any:
    """Convert a command-line string to the closest JSON-ish value.

    "true"/"false" become booleans, "none"/"null" become None, digits become
    integers and a comma-separated string becomes a list.
    """
    lowered = value.strip().lower()
    if lowered in ("true", "false"):
        return lowered == "true"
    if lowered in ("none", "null"):
        return None
    if lowered.isdigit():
        return int(lowered)
    if "," in value:
        items = [item.strip() for item in value.split(",") if item.strip()]
        if items and all(item.isdigit() for item in items):
            return [int(item) for item in items]
        return items
    return value


@app.command("view")
@command_wrapper
def view_config() -> None:
    """View current configuration."""
    config_service = get_config_service()
    logging_config = config_service.config.logging
    config_path = escape(str(config_service.config_path))
    log_path = escape(str(log_file_path(logging_config.dir)))
    console.print(f"[muted]Config: {config_path}[/muted]", soft_wrap=True)
    console.print(f"[muted]Log: {log_path}[/muted]", soft_wrap=True)
    format_json(config_service.config.model_dump(mode="json"))


@app.command("get")
@command_wrapper
def get_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., find.shuffle)"),
) -> None:
    """Get a configuration value."""
    try:
        value = get_config_service().get(key)
    except KeyError as e:
        raise AppError(f"Configuration key '{key}' not found", ERROR_NOT_FOUND) from e

    if isinstance(value, (dict, list)):
        console.print(json.dumps(value, indent=2), markup=False)
    else:
        console.print(str(value), markup=False)


@app.command("set")
@command_wrapper
def set_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., find.selected_minutes)"),
    value: str = typer.Argument(..., help="Configuration value"),
) -> None:
    """Set a configuration value."""
    parsed_value = parse_value(value)
    try:
        get_config_service().set(key, parsed_value)
    except KeyError as e:
        raise AppError(f"Configuration key '{key}' not found", ERROR_NOT_FOUND) from e
    except ValueError as e:
        raise AppError(f"Invalid value for '{key}': {e}", ERROR_INVALID_ARGS) from e

    format_success(f"Configuration '{key}' set to '{parsed_value}'")


@app.command("reset")
@command_wrapper
def reset_config(
    key: str | None = typer.Argument(None, help="Configuration key to reset"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Reset configuration to defaults."""
    if not yes:
        msg = "entire configuration" if not key else f"'{key}'"
        confirm = typer.confirm(f"Are you sure you want to reset {msg}?")
        if not confirm:
            format_info("Cancelled")
            raise typer.Exit(0)

    try:
        get_config_service().reset_config(key)
    except KeyError as e:
        raise AppError(f"Configuration key '{key}' not found", ERROR_NOT_FOUND) from e

    if key:
        format_success(f"Configuration '{key}' reset to default")
    else:
        format_success("Configuration reset to defaults")
