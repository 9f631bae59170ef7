"""Tests for the analytics and calendar commands using mocked services."""
# pylint: disable=redefined-outer-name

from __future__ import annotations

import json
from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from typer.testing import CliRunner

from taskflow_cli.commands.analytics import app, render_progress_bar
from taskflow_cli.main import app as main_app
from taskflow_cli.models import Task

runner = CliRunner()

SUMMARY = {
    "total": 4,
    "completed": 1,
    "pending": 3,
    "overdue": 2,
    "archived": 0,
    "completion_rate": 25.0,
}


@pytest.fixture
def mock_analytics():
    service_mock = MagicMock()
    service_mock.summary = AsyncMock(return_value=SUMMARY)
    service_mock.weekly_capacity = AsyncMock()
    service_mock.calendar_month = AsyncMock()
    with (
        patch(
            "taskflow_cli.commands.analytics.get_analytics_service",
            return_value=service_mock,
        ),
        patch(
            "taskflow_cli.commands.calendar_command.get_analytics_service",
            return_value=service_mock,
        ),
        patch(
            "taskflow_cli.commands.analytics.resolve_current_user_id",
            AsyncMock(return_value="user-1"),
        ),
        patch(
            "taskflow_cli.commands.calendar_command.resolve_current_user_id",
            AsyncMock(return_value="user-1"),
        ),
    ):
        yield service_mock


def test_progress_bar():
    assert render_progress_bar(50, 100, width=10) == "█████░░░░░"
    assert render_progress_bar(5, 0, width=4) == "░░░░"
    assert render_progress_bar(200, 100, width=4) == "████"


def test_summary_pretty(mock_analytics):
    result = runner.invoke(app, ["summary", "-o", "pretty"])

    assert result.exit_code == 0, result.output
    assert "25.00%" in result.output
    mock_analytics.summary.assert_awaited_once_with("user-1")


def test_summary_json(mock_analytics):
    result = runner.invoke(app, ["summary", "-o", "json"])

    assert result.exit_code == 0
    assert json.loads(result.output) == SUMMARY


def test_week_passes_threshold(mock_analytics):
    mock_analytics.weekly_capacity.return_value = [
        {"date": "2024-06-15", "task_count": 3, "overloaded": True}
    ]

    result = runner.invoke(app, ["week", "--threshold", "3", "-o", "json"])

    assert result.exit_code == 0, result.output
    mock_analytics.weekly_capacity.assert_awaited_once_with("user-1", overload_threshold=3)
    assert json.loads(result.output)[0]["overloaded"] is True


def test_calendar_json(mock_analytics):
    stamp = datetime(2024, 6, 3, 9, 0, tzinfo=UTC)
    task = Task(
        id="t1",
        title="Dentist",
        due_date=stamp,
        user_id="user-1",
        created_at=stamp,
        updated_at=stamp,
    )
    mock_analytics.calendar_month.return_value = {
        "year": 2024,
        "month": 6,
        "days": {day: ([task] if day == 3 else []) for day in range(1, 31)},
        "today": [],
        "upcoming": [task],
    }

    result = runner.invoke(
        main_app, ["calendar", "--year", "2024", "--month", "6", "-o", "json"]
    )

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert list(payload["days"]) == ["3"]
    assert payload["upcoming"][0]["title"] == "Dentist"
    args = mock_analytics.calendar_month.call_args.args
    assert args[:3] == ("user-1", 2024, 6)


def test_calendar_rejects_bad_month(mock_analytics):
    result = runner.invoke(main_app, ["calendar", "--month", "13"])
    assert result.exit_code == 2
