"""Tests for command_wrapper error reporting."""

import typer
from typer.testing import CliRunner

from selectdo.commands.decorators import AppError, command_wrapper
from selectdo.errors import FocusSessionActiveError, TaskNotFoundError

runner = CliRunner()


def _app_raising(error: Exception) -> typer.Typer:
    app = typer.Typer()

    @app.command()
    @command_wrapper
    def boom() -> None:
        raise error

    return app


def test_app_error_uses_its_exit_code():
    result = runner.invoke(_app_raising(AppError("Bad input", 2)))
    assert result.exit_code == 2
    assert "Error: Bad input" in result.output


def test_not_found_maps_to_5():
    result = runner.invoke(_app_raising(TaskNotFoundError("No task found")))
    assert result.exit_code == 5


def test_focus_conflict_maps_to_7():
    result = runner.invoke(_app_raising(FocusSessionActiveError("Write report")))
    assert result.exit_code == 7


def test_unexpected_error_is_exit_1():
    result = runner.invoke(_app_raising(RuntimeError("disk on fire")))
    assert result.exit_code == 1
    assert "An unexpected error occurred: disk on fire" in result.output


def test_bracketed_message_is_printed_verbatim():
    message = "Multiple tasks match suffix '1':\n  [a1] Fix [/] bug"
    result = runner.invoke(_app_raising(TaskNotFoundError(message)))
    assert result.exit_code == 5
    assert "[a1] Fix [/] bug" in result.output


def test_bracketed_unexpected_error():
    result = runner.invoke(_app_raising(ValueError("closing tag [/]")))
    assert result.exit_code == 1
    assert "closing tag [/]" in result.output
