"""Service layer for Select + Do.

Services sit between the CLI commands and the repositories and hold the
application's business rules.
"""

from .filter_engine import FilterEngine, select_candidates
from .review_service import ReviewSummary, build_review
from .task_store import TaskStore

__all__ = [
    "FilterEngine",
    "ReviewSummary",
    "TaskStore",
    "build_review",
    "select_candidates",
]
