"""Repository interfaces for Select + Do.

This package contains abstract base classes (ABCs) that define the contracts
for data persistence operations. Implementations live in
``selectdo.adapters.sqlite``.
"""

from .repository import TaskRepository

__all__ = ["TaskRepository"]
