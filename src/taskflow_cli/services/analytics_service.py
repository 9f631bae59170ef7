"""Analytics service - productivity summaries and calendar views.

Everything here is computed from ``TaskService.list_tasks``, so the results
are always limited to the caller's own tasks. Day boundaries are UTC.
"""

from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta
from typing import Any

from taskflow_cli.models import Task, ValidationFailure
from taskflow_cli.query.filters import STATUS_OVERDUE
from taskflow_cli.query.sorting import SORT_DUE_DATE
from taskflow_cli.services.task_service import TaskService
from taskflow_cli.utils.datetime_utils import utc_now

DEFAULT_OVERLOAD_THRESHOLD = 5
PLANNING_DAYS = 7


def _due_day(task: Task) -> date | None:
    return task.due_date.date() if task.due_date is not None else None


class AnalyticsService:
    """Read-only statistics over a user's tasks."""

    def __init__(self, task_service: TaskService):
        self.task_service = task_service

    async def summary(self, user_id: str, now: datetime | None = None) -> dict[str, Any]:
        """Task counts and completion percentage.

        Returns:
            Dictionary with total, completed, pending, overdue, archived and
            completion_rate (percent, two decimals, 0 when there are no tasks)
        """
        now = now or utc_now()
        tasks = await self.task_service.list_tasks(user_id)
        overdue = await self.task_service.list_tasks(user_id, status=STATUS_OVERDUE, now=now)

        total = len(tasks)
        completed = sum(1 for task in tasks if task.completed)
        return {
            "total": total,
            "completed": completed,
            "pending": total - completed,
            "overdue": len(overdue),
            "archived": sum(1 for task in tasks if task.archived),
            "completion_rate": round(completed / total * 100, 2) if total else 0.0,
        }

    async def weekly_capacity(
        self,
        user_id: str,
        today: date | None = None,
        overload_threshold: int = DEFAULT_OVERLOAD_THRESHOLD,
    ) -> list[dict[str, Any]]:
        """Tasks due on each of the next seven days, today included.

        A day is overloaded once its count reaches ``overload_threshold``.
        """
        today = today or utc_now().date()
        days = [today + timedelta(days=offset) for offset in range(PLANNING_DAYS)]
        counts = dict.fromkeys(days, 0)

        for task in await self.task_service.list_tasks(user_id):
            day = _due_day(task)
            if day in counts:
                counts[day] += 1

        return [
            {
                "date": day.isoformat(),
                "task_count": counts[day],
                "overloaded": counts[day] >= overload_threshold,
            }
            for day in days
        ]

    async def calendar_month(
        self,
        user_id: str,
        year: int,
        month: int,
        now: datetime | None = None,
    ) -> dict[str, Any]:
        """Tasks of one month grouped by day, plus today's and upcoming tasks.

        ``upcoming`` holds tasks due after ``now`` and at most seven days
        ahead, whether completed or not.

        Raises:
            ValidationFailure: If month is not between 1 and 12
        """
        if not 1 <= month <= 12:
            raise ValidationFailure(f"Invalid month: {month}", ["month"])

        now = now or utc_now()
        horizon = now + timedelta(days=PLANNING_DAYS)
        days_in_month = calendar.monthrange(year, month)[1]
        by_day: dict[int, list[Task]] = {day: [] for day in range(1, days_in_month + 1)}
        today: list[Task] = []
        upcoming: list[Task] = []

        tasks = await self.task_service.list_tasks(user_id, sort=SORT_DUE_DATE)
        for task in tasks:
            if task.due_date is None:
                continue
            due = task.due_date
            if due.year == year and due.month == month:
                by_day[due.day].append(task)
            if due.date() == now.date():
                today.append(task)
            if now < due <= horizon:
                upcoming.append(task)

        return {
            "year": year,
            "month": month,
            "days": by_day,
            "today": today,
            "upcoming": upcoming,
        }


def get_analytics_service(profile: str = "default") -> AnalyticsService:
    """Factory function to get an AnalyticsService instance."""
    from taskflow_cli.services.task_service import get_task_service

    return AnalyticsService(get_task_service(profile))
