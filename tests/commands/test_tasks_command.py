"""End-to-end tests for the task commands.

Each test registers and logs in a user against a temporary database, then
drives the real command tree through typer's CliRunner.
"""
# pylint: disable=redefined-outer-name

from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

from taskflow_cli.adapters.sqlite import close_connection
from taskflow_cli.main import app

runner = CliRunner()


def _login(email: str) -> None:
    result = runner.invoke(
        app,
        ["auth", "register", "--email", email, "--name", "Tester", "--password", "long-enough"],
    )
    assert result.exit_code == 0, result.output
    result = runner.invoke(
        app, ["auth", "login", "--email", email, "--password", "long-enough"]
    )
    assert result.exit_code == 0, result.output


def _list(*args: str) -> list[dict]:
    result = runner.invoke(app, ["tasks", "list", "-o", "json", *args])
    assert result.exit_code == 0, result.output
    return json.loads(result.output)["tasks"]


def _create(title: str, *args: str) -> dict:
    result = runner.invoke(app, ["tasks", "create", title, "-o", "json", *args])
    assert result.exit_code == 0, result.output
    return next(t for t in _list() if t["title"] == title)


@pytest.fixture
def logged_in(tmp_path, monkeypatch):
    monkeypatch.setenv("TASKFLOW_DB", str(tmp_path / "cli.db"))
    _login("ada@example.com")
    yield
    close_connection()


class TestCreateAndList:
    def test_create_then_list(self, logged_in):
        task = _create("Buy milk", "--priority", "high", "--tag", "errand")

        assert task["priority"] == "High"
        assert task["tags"] == ["errand"]
        assert task["completed"] is False

    def test_list_sorted_by_priority(self, logged_in):
        _create("low", "--priority", "Low")
        _create("none", "--priority", "none")
        _create("high", "--priority", "High")

        titles = [t["title"] for t in _list("--sort", "priority")]

        assert titles == ["high", "low", "none"]

    def test_list_filters_by_status_and_search(self, logged_in):
        report = _create("Write report")
        _create("Plan sprint")
        runner.invoke(app, ["tasks", "complete", report["id"]])

        assert [t["title"] for t in _list("--status", "active")] == ["Plan sprint"]
        assert [t["title"] for t in _list("--search", "REPORT")] == ["Write report"]

    def test_invalid_priority_exits_with_validation_code(self, logged_in):
        result = runner.invoke(app, ["tasks", "create", "x", "--priority", "urgent"])
        assert result.exit_code == 2

    def test_missing_due_date_format_is_rejected(self, logged_in):
        result = runner.invoke(app, ["tasks", "create", "x", "--due", "tomorrow"])
        assert result.exit_code == 2


class TestSingleTask:
    def test_get_by_prefix(self, logged_in):
        task = _create("Prefix me")

        result = runner.invoke(app, ["tasks", "get", task["id"][:8], "-o", "json"])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["id"] == task["id"]

    def test_short_prefix_rejected(self, logged_in):
        task = _create("t")
        result = runner.invoke(app, ["tasks", "get", task["id"][:2]])
        assert result.exit_code == 2

    def test_unknown_task_exits_not_found(self, logged_in):
        result = runner.invoke(app, ["tasks", "get", "00000000-0000-0000-0000-000000000000"])
        assert result.exit_code == 5
        assert "not found" in result.output

    def test_update_and_clear_due(self, logged_in):
        task = _create("t", "--due", "2030-01-02")

        result = runner.invoke(app, ["tasks", "update", task["id"], "--title", "renamed"])
        assert result.exit_code == 0, result.output
        result = runner.invoke(app, ["tasks", "update", task["id"], "--clear-due"])
        assert result.exit_code == 0, result.output

        updated = _list()[0]
        assert updated["title"] == "renamed"
        assert updated["due_date"] is None

    def test_update_without_changes(self, logged_in):
        task = _create("t")
        result = runner.invoke(app, ["tasks", "update", task["id"]])
        assert result.exit_code == 2

    def test_state_changes(self, logged_in):
        task = _create("t")

        for action in ("complete", "archive"):
            result = runner.invoke(app, ["tasks", action, task["id"]])
            assert result.exit_code == 0, result.output

        assert [t["id"] for t in _list("--status", "archived")] == [task["id"]]

        for action in ("reopen", "unarchive"):
            result = runner.invoke(app, ["tasks", action, task["id"]])
            assert result.exit_code == 0, result.output

        assert [t["id"] for t in _list("--status", "active")] == [task["id"]]

    def test_toggle_subtask(self, logged_in):
        task = _create("t", "--subtask", "one", "--subtask", "two")

        result = runner.invoke(app, ["tasks", "subtask", task["id"], "2"])

        assert result.exit_code == 0, result.output
        assert [s["completed"] for s in _list()[0]["subtasks"]] == [False, True]

    def test_delete_with_confirmation_declined(self, logged_in):
        task = _create("t")

        result = runner.invoke(app, ["tasks", "delete", task["id"]], input="n\n")

        assert result.exit_code == 0
        assert len(_list()) == 1

    def test_delete(self, logged_in):
        task = _create("t")

        result = runner.invoke(app, ["tasks", "delete", task["id"], "--yes"])

        assert result.exit_code == 0, result.output
        assert _list() == []


class TestProjects:
    def test_task_in_project_by_name(self, logged_in):
        result = runner.invoke(app, ["projects", "create", "Work"])
        assert result.exit_code == 0, result.output

        task = _create("t", "--project-id", "work")

        assert task["project_id"] is not None
        assert [t["id"] for t in _list("--project", task["project_id"])] == [task["id"]]

    def test_deleting_project_detaches_tasks(self, logged_in):
        runner.invoke(app, ["projects", "create", "Work"])
        task = _create("t", "--project-id", "Work")

        result = runner.invoke(app, ["projects", "delete", "Work", "--yes"])

        assert result.exit_code == 0, result.output
        assert "1 task(s) detached" in " ".join(result.output.split())
        assert _list()[0]["project_id"] is None
        assert _list()[0]["id"] == task["id"]


class TestIsolation:
    def test_other_user_sees_nothing(self, logged_in):
        task = _create("private")

        _login("bob@example.com")

        assert _list() == []
        result = runner.invoke(app, ["tasks", "get", task["id"]])
        assert result.exit_code == 5

    def test_logged_out_exits_with_auth_code(self, logged_in):
        runner.invoke(app, ["auth", "logout"])

        result = runner.invoke(app, ["tasks", "list"])

        assert result.exit_code == 3
