"""Decorators for command functions."""

import functools
import time
import traceback
from collections.abc import Callable

import typer

from selectdo.errors import FocusSessionError, TaskNotFoundError
from selectdo.utils.exit_codes import ERROR_CONFLICT, ERROR_NOT_FOUND, get_exit_code_name
from selectdo.utils.logger import get_logger
from selectdo.utils.ui.formatters import format_error


class AppError(Exception):
    """Custom application error with exit code."""

    def __init__(self, message: str, exit_code: int = 1):
        super().__init__(message)
        self.exit_code = exit_code


def command_wrapper(func: Callable):
    """Wrap a command with timing logs and uniform error reporting."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = get_logger()
        cmd = func.__name__
        start = time.monotonic()
        logger.info("command started: %s", cmd)
        try:
            result = func(*args, **kwargs)
            elapsed = time.monotonic() - start
            logger.info("command completed: %s (%.3fs)", cmd, elapsed)
            return result

        except TaskNotFoundError as e:
            return _fail(cmd, start, AppError(str(e), ERROR_NOT_FOUND))

        except FocusSessionError as e:
            return _fail(cmd, start, AppError(str(e), ERROR_CONFLICT))

        except AppError as e:
            return _fail(cmd, start, e)

        except typer.Exit:
            # Re-raise Typer's own exits (like --help or explicit Exit(0))
            raise

        except Exception as e:
            elapsed = time.monotonic() - start
            logger.error(
                "command failed: %s (%.3fs) - %s\n%s",
                cmd,
                elapsed,
                str(e),
                traceback.format_exc(),
            )
            format_error(f"An unexpected error occurred: {str(e)}")
            raise typer.Exit(code=1) from e

    return wrapper


def _fail(cmd: str, start: float, error: AppError):
    elapsed = time.monotonic() - start
    get_logger().error(
        "command failed: %s (%.3fs) [%s] - %s",
        cmd,
        elapsed,
        get_exit_code_name(error.exit_code),
        str(error),
    )
    format_error(str(error))
    raise typer.Exit(code=error.exit_code) from error
