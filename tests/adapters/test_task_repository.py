"""Tests for SqliteTaskRepository."""

import sqlite3
from datetime import UTC, datetime, timedelta, timezone
from unittest.mock import patch

import pytest

from selectdo.adapters.sqlite import SqliteTaskRepository
from selectdo.adapters.sqlite.utils import parse_datetime, row_to_dict, to_iso
from selectdo.errors import PersistenceError
from selectdo.models import Task

NOW = datetime(2025, 3, 10, 9, 0, tzinfo=UTC)


def _task(task_id="t1", **overrides) -> Task:
    data = {
        "id": task_id,
        "title": "Write report",
        "context": "Work",
        "kind": "Standard",
        "minutes": 30,
        "updated_at": NOW,
        "created_at": NOW,
    }
    data.update(overrides)
    return Task(**data)


# ---------------------------------------------------------------------------
# CRUD
# ---------------------------------------------------------------------------


class TestSaveAndGet:
    def test_round_trip_all_fields(self, memory_repo):
        task = _task(
            is_priority=True,
            completed_at=NOW + timedelta(minutes=5),
            updated_at=NOW + timedelta(minutes=5),
            energy="High",
            project="Thesis",
            tags=["Deep", "writing"],
        )
        memory_repo.save(task)
        assert memory_repo.get("t1") == task

    def test_get_missing(self, memory_repo):
        assert memory_repo.get("missing") is None

    def test_save_updates_existing(self, memory_repo):
        memory_repo.save(_task(tags=["a", "b"]))
        memory_repo.save(_task(title="Write summary", tags=["c"]))

        stored = memory_repo.get("t1")
        assert stored.title == "Write summary"
        assert stored.tags == ["c"]
        assert len(memory_repo.list_all()) == 1

    def test_tag_order_is_kept(self, memory_repo):
        memory_repo.save(_task(tags=["zeta", "alpha", "mid"]))
        assert memory_repo.get("t1").tags == ["zeta", "alpha", "mid"]

    def test_non_utc_timestamps_normalized(self, memory_repo):
        local = datetime(2025, 3, 10, 11, 0, tzinfo=timezone(timedelta(hours=2)))
        memory_repo.save(_task(updated_at=local, created_at=local))
        assert memory_repo.get("t1").updated_at == NOW


class TestListAll:
    def test_empty(self, memory_repo):
        assert memory_repo.list_all() == []

    def test_most_recently_updated_first(self, memory_repo):
        memory_repo.save(_task("old", updated_at=NOW))
        memory_repo.save(_task("new", updated_at=NOW + timedelta(hours=1), tags=["x"]))
        memory_repo.save(_task("mid", updated_at=NOW + timedelta(microseconds=1)))

        tasks = memory_repo.list_all()

        assert [t.id for t in tasks] == ["new", "mid", "old"]
        assert tasks[0].tags == ["x"]
        assert tasks[1].tags == []


class TestDelete:
    def test_delete(self, memory_repo):
        memory_repo.save(_task(tags=["a"]))
        assert memory_repo.delete("t1") is True
        assert memory_repo.get("t1") is None
        count = memory_repo.connection.execute("SELECT COUNT(*) FROM task_tags").fetchone()
        assert count[0] == 0

    def test_delete_missing(self, memory_repo):
        assert memory_repo.delete("missing") is False


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class TestErrors:
    def test_closed_connection_raises_persistence_error(self):
        conn = sqlite3.connect(":memory:")
        conn.close()
        repo = SqliteTaskRepository(connection=conn)

        with pytest.raises(PersistenceError):
            repo.list_all()
        with pytest.raises(PersistenceError):
            repo.save(_task())
        with pytest.raises(PersistenceError):
            repo.delete("t1")

    def test_unopenable_database(self, tmp_path):
        repo = SqliteTaskRepository(db_path=tmp_path / "db")
        with patch(
            "selectdo.adapters.sqlite.task_repository.get_connection",
            side_effect=sqlite3.OperationalError("unable to open database file"),
        ):
            with pytest.raises(PersistenceError):
                repo.get("t1")


# ---------------------------------------------------------------------------
# utils
# ---------------------------------------------------------------------------


class TestUtils:
    def test_to_iso_is_fixed_width_utc(self):
        assert to_iso(NOW) == "2025-03-10T09:00:00.000000+00:00"
        assert to_iso(None) is None

    def test_to_iso_assumes_utc_for_naive(self):
        assert to_iso(datetime(2025, 3, 10, 9, 0)) == to_iso(NOW)

    def test_parse_datetime(self):
        assert parse_datetime("2025-03-10T09:00:00Z") == NOW
        assert parse_datetime(NOW) is NOW
        assert parse_datetime(None) is None

    def test_row_to_dict(self):
        conn = sqlite3.connect(":memory:")
        conn.row_factory = sqlite3.Row
        row = conn.execute("SELECT 1 AS a, 'x' AS b").fetchone()
        assert row_to_dict(row) == {"a": 1, "b": "x"}
        assert row_to_dict(None) == {}
        conn.close()
