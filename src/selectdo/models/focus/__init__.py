"""Focus mode: the countdown state machine and its tick source."""

from .state import (
    FinishReason,
    FocusOutcome,
    FocusSession,
    FocusSessionController,
    FocusState,
)
from .ticker import Ticker

__all__ = [
    "FinishReason",
    "FocusOutcome",
    "FocusSession",
    "FocusSessionController",
    "FocusState",
    "Ticker",
]
