"""Fire-and-forget user feedback (the terminal's stand-in for haptics)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Literal

from rich.console import Console

from selectdo.utils.logger import get_logger
from selectdo.utils.ui.console import get_console

FeedbackKind = Literal["light", "success"]


class Feedback(ABC):
    """Feedback collaborator called on add, complete and priority toggles."""

    @abstractmethod
    def light(self) -> None:
        """Subtle acknowledgement (task added, priority toggled)."""

    @abstractmethod
    def success(self) -> None:
        """Stronger acknowledgement (task completed)."""


class NullFeedback(Feedback):
    """Feedback that does nothing; used when feedback is disabled."""

    def light(self) -> None:
        pass

    def success(self) -> None:
        pass


class ConsoleFeedback(Feedback):
    """Rings the terminal bell when a task is completed."""

    def __init__(self, console: Console | None = None):
        self.console = console or get_console()

    def light(self) -> None:
        pass

    def success(self) -> None:
        self.console.bell()


def notify(feedback: Feedback, kind: FeedbackKind) -> None:
    """Send feedback, ignoring any failure."""
    try:
        if kind == "success":
            feedback.success()
        else:
            feedback.light()
    except Exception as e:
        get_logger().debug("feedback %s failed: %s", kind, e)
