"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from the real config, data and
log directories.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime, timedelta
from unittest.mock import patch

import pytest

from selectdo.adapters.sqlite import DatabaseConnection, SqliteTaskRepository
from selectdo.adapters.sqlite.connection import open_connection
from selectdo.services.task_store import TaskStore


class FixedClock:
    """Controllable clock: returns the same instant until advanced."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


# ---------------------------------------------------------------------------
# Isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolate_logger(tmp_path_factory):
    """Send log output to a temporary directory."""
    import selectdo.utils.logger as logger_mod

    log_dir = str(tmp_path_factory.mktemp("logs"))
    logger_mod._logger = None
    logging.getLogger("selectdo").handlers.clear()
    with patch("selectdo.utils.logger.user_log_dir", return_value=log_dir):
        yield
    for handler in logging.getLogger("selectdo").handlers:
        handler.close()
    logging.getLogger("selectdo").handlers.clear()
    logger_mod._logger = None


@pytest.fixture()
def tmp_config(tmp_path):
    """Provide a real ConfigService backed by a temporary directory.

    Patches platform dirs so config/data files land in *tmp_path* only and
    primes the get_config_service() cache with the temporary service.
    """
    from selectdo.services.config_service import get_config_service

    tmpdir = str(tmp_path)
    get_config_service.cache_clear()
    with patch("selectdo.services.config_service.user_config_dir", return_value=tmpdir):
        with patch("selectdo.services.config_service.user_data_dir", return_value=tmpdir):
            svc = get_config_service()
            yield svc
    get_config_service.cache_clear()
    DatabaseConnection.close_connection()


# ---------------------------------------------------------------------------
# Store fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def clock():
    return FixedClock(datetime(2025, 3, 10, 9, 0, tzinfo=UTC))


@pytest.fixture()
def memory_repo():
    """SqliteTaskRepository on a private in-memory database."""
    connection = open_connection(":memory:")
    yield SqliteTaskRepository(connection=connection)
    connection.close()


@pytest.fixture()
def store(memory_repo, clock):
    return TaskStore(memory_repo, clock=clock)
