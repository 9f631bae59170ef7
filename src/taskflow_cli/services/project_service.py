"""Project service - Business logic for project operations."""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from taskflow_cli.models import (
    DEFAULT_PROJECT_COLOR,
    NotFoundError,
    Project,
    ProjectCreate,
    ProjectUpdate,
    ValidationFailure,
)
from taskflow_cli.query import OrderBy, by_id
from taskflow_cli.repositories import ProjectRepository, TaskRepository
from taskflow_cli.utils.logger import get_logger

_NEWEST_FIRST = (OrderBy("created_at", descending=True), OrderBy("rowid", descending=True))


class ProjectService:
    """Service for project business logic.

    Deleting a project also detaches it from the owner's tasks, so the task
    repository is needed alongside the project repository.
    """

    def __init__(
        self,
        project_repository: ProjectRepository,
        task_repository: TaskRepository,
    ):
        """Initialize the project service.

        Args:
            project_repository: ProjectRepository implementation for data access
            task_repository: TaskRepository used by the delete cascade
        """
        self.repository = project_repository
        self.task_repository = task_repository

    async def list_projects(self, user_id: str) -> list[Project]:
        """List the caller's projects, newest first."""
        return await self.repository.find(user_id, None, _NEWEST_FIRST)

    async def get_project(self, user_id: str, project_id: str) -> Project:
        """Get a specific project by ID.

        Raises:
            NotFoundError: If the project does not exist or is not owned by the caller
        """
        project = await self.repository.find_one(user_id, by_id(project_id))
        if project is None:
            raise NotFoundError("Project", project_id)
        return project

    async def create_project(
        self,
        user_id: str,
        name: str,
        *,
        description: str | None = None,
        color: str | None = None,
    ) -> Project:
        """Create a new project.

        Args:
            user_id: Identity of the caller
            name: Project name (required)
            description: Optional description
            color: Hex color; defaults to #007bff

        Returns:
            Created Project object
        """
        try:
            project_data = ProjectCreate(name=name, description=description, color=color)
        except ValidationError as e:
            raise ValidationFailure.from_pydantic(e) from e
        return await self.repository.create(user_id, project_data)

    async def update_project(
        self, user_id: str, project_id: str, /, **changes: Any
    ) -> Project:
        """Update an existing project.

        Only the keyword arguments actually passed are written. Clearing the
        color restores the default color; the name cannot be cleared.
        """
        try:
            updates = ProjectUpdate(**changes)
        except ValidationError as e:
            raise ValidationFailure.from_pydantic(e) from e

        values = updates.model_dump(exclude_unset=True)
        if "name" in values and values["name"] is None:
            raise ValidationFailure("name cannot be cleared", ["name"])
        if "color" in values and values["color"] is None:
            values["color"] = DEFAULT_PROJECT_COLOR

        count = await self.repository.update_matching(user_id, by_id(project_id), values)
        if count == 0:
            raise NotFoundError("Project", project_id)
        return await self.get_project(user_id, project_id)

    async def delete_project(self, user_id: str, project_id: str) -> int:
        """Delete a project and detach it from the owner's tasks.

        Tasks are never deleted; their project reference is unset while
        the legacy project name is left as is. Both steps commit together.

        Returns:
            Number of tasks detached from the project

        Raises:
            NotFoundError: If the project does not exist or is not owned by
                the caller; no task is touched in that case
        """
        with self.repository.transaction():
            deleted = await self.repository.delete_matching(user_id, by_id(project_id))
            if deleted == 0:
                raise NotFoundError("Project", project_id)
            detached = await self.task_repository.unset_project_reference(
                user_id, project_id
            )

        get_logger("services").info(
            "deleted project %s, detached %d task(s)", project_id, detached
        )
        return detached


def get_project_service(profile: str = "default") -> ProjectService:
    """Factory function to get a ProjectService instance."""
    from taskflow_cli.services.storage import get_storage

    storage = get_storage(profile)
    return ProjectService(storage.project_repository, storage.task_repository)
