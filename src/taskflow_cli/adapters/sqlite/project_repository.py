"""SQLite implementation of ProjectRepository."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from taskflow_cli.adapters.sqlite.base import SqliteRepository
from taskflow_cli.adapters.sqlite.schema import PROJECT_COLUMNS
from taskflow_cli.adapters.sqlite.utils import (
    generate_uuid,
    now_iso,
    row_to_dict,
    translate_errors,
)
from taskflow_cli.models import DEFAULT_PROJECT_COLOR, Project, ProjectCreate
from taskflow_cli.query import OrderBy, Predicate, by_id
from taskflow_cli.repositories import ProjectRepository


class SqliteProjectRepository(SqliteRepository, ProjectRepository):
    """SQLite implementation of project repository."""

    table = "projects"
    writable_columns = PROJECT_COLUMNS

    async def find(
        self,
        owner_id: str,
        predicate: Predicate | None = None,
        order_by: Sequence[OrderBy] = (),
    ) -> list[Project]:
        rows = self._select(owner_id, predicate, order_by)
        return [Project(**row_to_dict(row)) for row in rows]

    async def find_one(self, owner_id: str, predicate: Predicate) -> Project | None:
        rows = self._select(owner_id, predicate, limit=1)
        return Project(**row_to_dict(rows[0])) if rows else None

    async def create(self, owner_id: str, project_data: ProjectCreate) -> Project:
        """Create a new project."""
        project_id = generate_uuid()
        now = now_iso()

        with translate_errors():
            self.connection.execute(
                """INSERT INTO projects (
                    id, name, description, color, user_id, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?)""",
                (
                    project_id,
                    project_data.name,
                    project_data.description,
                    project_data.color or DEFAULT_PROJECT_COLOR,
                    owner_id,
                    now,
                    now,
                ),
            )

        return await self.find_one(owner_id, by_id(project_id))

    async def update_matching(
        self, owner_id: str, predicate: Predicate, changes: dict[str, Any]
    ) -> int:
        return self._update(owner_id, predicate, changes)

    async def delete_matching(self, owner_id: str, predicate: Predicate) -> int:
        return self._delete(owner_id, predicate)
