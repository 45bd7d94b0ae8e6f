"""CLI tests for the task commands: add, list, complete, reopen, priority, edit, delete."""

import json

import pytest
from typer.testing import CliRunner

from selectdo.main import app
from selectdo.services.bootstrap import build_store

runner = CliRunner()


@pytest.fixture(autouse=True)
def cli_env(tmp_config):
    """Run every command against a temporary config and database."""
    tmp_config.set("feedback.enabled", False)
    return tmp_config


def _add(title, *args):
    result = runner.invoke(app, ["add", title, *args], catch_exceptions=False)
    assert result.exit_code == 0, result.output
    return result


def _only_task():
    (task,) = build_store().all()
    return task


# ---------------------------------------------------------------------------
# add
# ---------------------------------------------------------------------------


class TestAdd:
    def test_add_with_options(self):
        result = _add(
            "Write report", "-c", "Work", "-k", "Standard", "-m", "30",
            "--priority", "-e", "High", "--project", "Q1", "-t", "deep", "-t", "Deep",
        )
        assert "Task created" in result.output

        task = _only_task()
        assert task.title == "Write report"
        assert task.context == "Work"
        assert task.kind == "Standard"
        assert task.minutes == 30
        assert task.is_priority is True
        assert task.energy == "High"
        assert task.project == "Q1"
        assert task.tags == ["deep"]

    def test_add_uses_configured_defaults(self, cli_env):
        cli_env.set("tasks.default_minutes", 25)
        _add("Call mom")
        task = _only_task()
        assert task.context == "Personal"
        assert task.kind == "Atomic"
        assert task.minutes == 25

    def test_add_json(self):
        result = _add("Write report", "--json")
        data = json.loads(result.output)
        assert data["title"] == "Write report"
        assert data["completed_at"] is None

    def test_blank_title(self):
        result = runner.invoke(app, ["add", "   "])
        assert result.exit_code == 2
        assert "cannot be blank" in result.output
        assert build_store().all() == []

    def test_minutes_must_be_positive(self):
        result = runner.invoke(app, ["add", "Write report", "-m", "0"])
        assert result.exit_code != 0
        assert build_store().all() == []

    def test_unknown_kind_rejected(self):
        result = runner.invoke(app, ["add", "Write report", "-k", "Bogus"])
        assert result.exit_code == 2
        assert "Invalid kind 'Bogus'" in result.output
        assert build_store().all() == []

    def test_kind_and_energy_ignore_case(self):
        _add("Write report", "-k", "standard", "-e", "low")
        task = _only_task()
        assert task.kind == "Standard"
        assert task.energy == "Low"

    def test_unknown_energy_rejected(self):
        result = runner.invoke(app, ["add", "Write report", "-e", "Huge"])
        assert result.exit_code == 2
        assert build_store().all() == []

    def test_minutes_must_be_an_option(self):
        result = runner.invoke(app, ["add", "Write report", "-m", "7"])
        assert result.exit_code == 2
        assert "Invalid minutes 7" in result.output
        assert build_store().all() == []

    def test_configured_minute_options(self, cli_env):
        cli_env.set("tasks.minute_options", [7, 14])
        _add("Write report", "-m", "7")
        assert _only_task().minutes == 7


# ---------------------------------------------------------------------------
# list
# ---------------------------------------------------------------------------


class TestList:
    def test_list_open_tasks(self):
        _add("Write report", "-c", "Work")
        _add("Call mom")
        store = build_store()
        done = next(t for t in store.all() if t.title == "Call mom")
        store.complete(done.id)

        result = runner.invoke(app, ["list"], catch_exceptions=False)
        assert result.exit_code == 0
        assert "Write report" in result.output
        assert "Call mom" not in result.output

        result = runner.invoke(app, ["list", "--all"], catch_exceptions=False)
        assert "Call mom" in result.output

    def test_list_json_by_context(self):
        _add("Write report", "-c", "Work")
        _add("Call mom")
        result = runner.invoke(app, ["list", "-c", "Work", "--json"], catch_exceptions=False)
        assert [t["title"] for t in json.loads(result.output)] == ["Write report"]

    def test_list_empty(self):
        result = runner.invoke(app, ["list"], catch_exceptions=False)
        assert result.exit_code == 0
        assert "No tasks found" in result.output


# ---------------------------------------------------------------------------
# complete / reopen / priority
# ---------------------------------------------------------------------------


class TestComplete:
    def test_complete_by_full_id(self):
        _add("Write report")
        task = _only_task()

        result = runner.invoke(app, ["complete", task.id], catch_exceptions=False)

        assert result.exit_code == 0
        assert "Completed: Write report" in result.output
        assert _only_task().completed_at is not None

    def test_complete_by_suffix(self):
        _add("Write report")
        task = _only_task()
        result = runner.invoke(app, ["complete", task.id[-6:]], catch_exceptions=False)
        assert result.exit_code == 0
        assert _only_task().is_completed

    def test_complete_several(self):
        _add("Write report")
        _add("Call mom")
        ids = [t.id for t in build_store().all()]

        result = runner.invoke(app, ["complete", *ids], catch_exceptions=False)

        assert result.exit_code == 0
        assert all(t.is_completed for t in build_store().all())

    def test_unknown_id_completes_nothing(self):
        _add("Write report")
        task = _only_task()

        result = runner.invoke(app, ["complete", task.id, "no-such-task"])

        assert result.exit_code == 5
        assert "No task found" in result.output
        assert not _only_task().is_completed

    def test_reopen(self):
        _add("Write report")
        task = _only_task()
        build_store().complete(task.id)

        result = runner.invoke(app, ["reopen", task.id], catch_exceptions=False)

        assert result.exit_code == 0
        assert "Reopened" in result.output
        assert _only_task().completed_at is None

    def test_reopen_open_task(self):
        _add("Write report")
        result = runner.invoke(app, ["reopen", _only_task().id], catch_exceptions=False)
        assert result.exit_code == 0
        assert "not completed" in result.output

    def test_priority_toggle(self):
        _add("Write report")
        task_id = _only_task().id

        result = runner.invoke(app, ["priority", task_id], catch_exceptions=False)
        assert "Prioritized" in result.output
        assert _only_task().is_priority is True

        runner.invoke(app, ["priority", task_id], catch_exceptions=False)
        assert _only_task().is_priority is False


# ---------------------------------------------------------------------------
# edit / delete
# ---------------------------------------------------------------------------


class TestEdit:
    def test_edit_fields(self):
        _add("Write report", "-e", "Low", "-t", "a")
        task_id = _only_task().id

        result = runner.invoke(
            app,
            ["edit", task_id, "--title", "Write summary", "-m", "20", "--priority",
             "--energy", "", "-t", "b", "-t", "c"],
            catch_exceptions=False,
        )

        assert result.exit_code == 0, result.output
        task = _only_task()
        assert task.title == "Write summary"
        assert task.minutes == 20
        assert task.is_priority is True
        assert task.energy is None
        assert task.tags == ["b", "c"]

    def test_clear_tags(self):
        _add("Write report", "-t", "a")
        runner.invoke(app, ["edit", _only_task().id, "--clear-tags"], catch_exceptions=False)
        assert _only_task().tags == []

    def test_blank_title_rejected(self):
        _add("Write report")
        result = runner.invoke(app, ["edit", _only_task().id, "--title", " "])
        assert result.exit_code == 2
        assert _only_task().title == "Write report"

    def test_nothing_to_change(self):
        _add("Write report")
        result = runner.invoke(app, ["edit", _only_task().id], catch_exceptions=False)
        assert "Nothing to change" in result.output

    def test_kind_is_validated(self):
        _add("Write report")
        task_id = _only_task().id

        result = runner.invoke(app, ["edit", task_id, "-k", "Bogus"])
        assert result.exit_code == 2
        assert _only_task().kind == "Atomic"

        runner.invoke(app, ["edit", task_id, "-k", "progress"], catch_exceptions=False)
        assert _only_task().kind == "Progress"


class TestDelete:
    def test_delete_with_yes(self):
        _add("Write report")
        result = runner.invoke(app, ["delete", _only_task().id, "--yes"], catch_exceptions=False)
        assert result.exit_code == 0
        assert build_store().all() == []

    def test_delete_confirmation_declined(self):
        _add("Write report")
        result = runner.invoke(app, ["delete", _only_task().id], input="n\n")
        assert result.exit_code == 0
        assert "Cancelled" in result.output
        assert len(build_store().all()) == 1

    def test_delete_confirmed(self):
        _add("Write report")
        result = runner.invoke(app, ["delete", _only_task().id], input="y\n")
        assert result.exit_code == 0
        assert build_store().all() == []


# ---------------------------------------------------------------------------
# titles that look like rich markup
# ---------------------------------------------------------------------------


class TestBracketedTitles:
    @pytest.mark.parametrize("title", ["Fix [/] bug", "Review [/bold] notes"])
    def test_complete(self, title):
        _add(title)
        result = runner.invoke(app, ["complete", _only_task().id], catch_exceptions=False)
        assert result.exit_code == 0
        assert f"Completed: {title}" in result.output

    def test_add_lists_title_verbatim(self):
        result = _add("[red]Call mom")
        assert "[red]Call mom" in result.output

        result = runner.invoke(app, ["list"], catch_exceptions=False)
        assert "[red]Call mom" in result.output

    def test_reopen_and_priority(self):
        _add("Fix [/] bug")
        task_id = _only_task().id
        build_store().complete(task_id)

        result = runner.invoke(app, ["reopen", task_id], catch_exceptions=False)
        assert "Reopened: Fix [/] bug" in result.output

        result = runner.invoke(app, ["priority", task_id], catch_exceptions=False)
        assert "Prioritized: Fix [/] bug" in result.output

    def test_edit_shows_details(self):
        _add("Write report")
        result = runner.invoke(
            app, ["edit", _only_task().id, "--title", "Fix [/] bug"], catch_exceptions=False
        )
        assert result.exit_code == 0
        assert "Fix [/] bug" in result.output

    def test_delete(self):
        _add("[bold]Call[/bold] mom")
        result = runner.invoke(app, ["delete", _only_task().id, "--yes"], catch_exceptions=False)
        assert result.exit_code == 0
        assert "Task deleted: [bold]Call[/bold] mom" in result.output
