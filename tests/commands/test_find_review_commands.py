"""CLI tests for find and review."""

import json

import pytest
from typer.testing import CliRunner

from selectdo.main import app
from selectdo.services.bootstrap import build_store

runner = CliRunner()


@pytest.fixture(autouse=True)
def cli_env(tmp_config):
    tmp_config.set("feedback.enabled", False)
    return tmp_config


@pytest.fixture()
def tasks():
    store = build_store()
    return {
        "report": store.add("Write report", "Work", "Standard", 30, tags=["deep"]),
        "email": store.add("Answer email", "Work", "Atomic", 5, True, energy="Low"),
        "slides": store.add("Prepare slides", "Work", "Progress", 45),
        "mom": store.add("Call mom", "Personal", "Atomic", 10),
    }


def _find_titles(*args):
    result = runner.invoke(app, ["find", "--json", *args], catch_exceptions=False)
    assert result.exit_code == 0, result.output
    return sorted(t["title"] for t in json.loads(result.output))


class TestFind:
    def test_defaults_come_from_config(self, tasks):
        # Personal, up to 15 minutes
        assert _find_titles() == ["Call mom"]

    def test_context_and_minutes(self, tasks):
        assert _find_titles("-c", "Work", "-m", "30") == ["Answer email", "Write report"]

    def test_any_time(self, tasks):
        assert _find_titles("-c", "Work", "--any-time") == [
            "Answer email",
            "Prepare slides",
            "Write report",
        ]

    def test_priority_energy_and_tags(self, tasks):
        assert _find_titles("-c", "Work", "--any-time", "-p") == ["Answer email"]
        assert _find_titles("-c", "Work", "--any-time", "-e", "Low") == ["Answer email"]
        assert _find_titles("-c", "Work", "--any-time", "-t", "DEEP") == ["Write report"]

    def test_completed_tasks_hidden(self, tasks):
        build_store().complete(tasks["email"].id)
        assert _find_titles("-c", "Work", "-m", "30") == ["Write report"]

    def test_unknown_context_uses_default(self, tasks):
        assert _find_titles("-c", "Garden") == ["Call mom"]

    def test_no_shuffle_keeps_recency_order(self, tasks):
        result = runner.invoke(
            app, ["find", "--json", "-c", "Work", "--any-time", "--no-shuffle"],
            catch_exceptions=False,
        )
        titles = [t["title"] for t in json.loads(result.output)]
        assert titles == ["Prepare slides", "Answer email", "Write report"]

    def test_limit(self, tasks):
        assert len(_find_titles("-c", "Work", "--any-time", "-n", "2")) == 2

    def test_pretty_output(self, tasks):
        result = runner.invoke(app, ["find", "-c", "Work", "-m", "30"], catch_exceptions=False)
        assert result.exit_code == 0
        assert "Work • ≤ 30 min" in result.output
        assert "Write report" in result.output
        assert "Prepare slides" not in result.output

    def test_interactive_reshuffle(self, tasks):
        result = runner.invoke(
            app, ["find", "-c", "Work", "--any-time", "-i"], input="r\nq\n",
            catch_exceptions=False,
        )
        assert result.exit_code == 0
        assert result.output.count("Work • any time") == 2


class TestReview:
    def test_review_today(self, tasks):
        store = build_store()
        store.complete(tasks["report"].id)
        store.complete(tasks["mom"].id)

        result = runner.invoke(app, ["review"], catch_exceptions=False)

        assert result.exit_code == 0
        assert "Completed: 2 task(s)" in result.output
        assert "Focused time: 40 minutes" in result.output
        assert "Most productive context: Work" in result.output
        assert "Preferred time: Standard" in result.output
        assert "Write report" in result.output

    def test_review_nothing_done(self):
        result = runner.invoke(app, ["review"], catch_exceptions=False)
        assert result.exit_code == 0
        assert "Completed: 0 task(s)" in result.output
        assert "Most productive context: —" in result.output
