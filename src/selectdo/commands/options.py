"""Checks for option values that must come from a fixed list."""

from collections.abc import Iterable, Sequence

from selectdo.utils.exit_codes import ERROR_INVALID_ARGS

from .decorators import AppError


def match_choice(value: str, choices: Iterable[str]) -> str | None:
    """Spelling of ``value`` used in ``choices``, ignoring case and padding."""
    wanted = value.strip().lower()
    for choice in choices:
        if choice.lower() == wanted:
            return choice
    return None


def require_choice(option: str, value: str, choices: Sequence[str]) -> str:
    """Return the matching choice or fail with ERROR_INVALID_ARGS."""
    match = match_choice(value, choices)
    if match is None:
        raise AppError(
            f"Invalid {option} '{value}'. Choose one of: {', '.join(choices)}",
            ERROR_INVALID_ARGS,
        )
    return match


def require_minutes(minutes: int, options: Sequence[int]) -> int:
    if minutes not in options:
        raise AppError(
            f"Invalid minutes {minutes}. Choose one of: "
            + ", ".join(str(m) for m in options),
            ERROR_INVALID_ARGS,
        )
    return minutes
