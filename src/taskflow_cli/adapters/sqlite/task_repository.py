"""SQLite implementation of TaskRepository."""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any

from taskflow_cli.adapters.sqlite.base import SqliteRepository
from taskflow_cli.adapters.sqlite.schema import TASK_COLUMNS
from taskflow_cli.adapters.sqlite.utils import (
    generate_uuid,
    now_iso,
    row_to_dict,
    to_db_value,
    translate_errors,
)
from taskflow_cli.models import Task, TaskCreate
from taskflow_cli.query import Eq, OrderBy, Predicate, by_id
from taskflow_cli.repositories import TaskRepository


def _row_to_task(row: Any) -> Task:
    task_dict = row_to_dict(row)
    task_dict["subtasks"] = json.loads(task_dict.get("subtasks") or "[]")
    task_dict["tags"] = json.loads(task_dict.get("tags") or "[]")
    return Task(**task_dict)


class SqliteTaskRepository(SqliteRepository, TaskRepository):
    """SQLite implementation of task repository."""

    table = "tasks"
    writable_columns = TASK_COLUMNS

    async def find(
        self,
        owner_id: str,
        predicate: Predicate | None = None,
        order_by: Sequence[OrderBy] = (),
    ) -> list[Task]:
        return [_row_to_task(row) for row in self._select(owner_id, predicate, order_by)]

    async def find_one(self, owner_id: str, predicate: Predicate) -> Task | None:
        rows = self._select(owner_id, predicate, limit=1)
        return _row_to_task(rows[0]) if rows else None

    async def create(self, owner_id: str, task_data: TaskCreate) -> Task:
        """Create a new task."""
        task_id = generate_uuid()
        now = now_iso()

        with translate_errors():
            self.connection.execute(
                """INSERT INTO tasks (
                    id, title, description, completed, priority, due_date,
                    archived, subtasks, tags, project, project_id, user_id,
                    created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
                (
                    task_id,
                    task_data.title,
                    task_data.description,
                    0,
                    task_data.priority,
                    to_db_value(task_data.due_date),
                    0,
                    to_db_value(task_data.subtasks),
                    to_db_value(task_data.tags),
                    task_data.project,
                    task_data.project_id,
                    owner_id,
                    now,
                    now,
                ),
            )

        return await self.find_one(owner_id, by_id(task_id))

    async def update_matching(
        self, owner_id: str, predicate: Predicate, changes: dict[str, Any]
    ) -> int:
        return self._update(owner_id, predicate, changes)

    async def delete_matching(self, owner_id: str, predicate: Predicate) -> int:
        return self._delete(owner_id, predicate)

    async def unset_project_reference(self, owner_id: str, project_id: str) -> int:
        return self._update(owner_id, Eq("project_id", project_id), {"project_id": None})
