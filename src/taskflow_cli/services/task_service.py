"""Task service - Business logic for task operations.

This service layer sits between commands and repositories, providing
a clean API for task-related business logic. Every method takes the
caller's user id first; repositories scope all access to that owner.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import ValidationError

from taskflow_cli.models import (
    DEFAULT_PRIORITY,
    NotFoundError,
    Subtask,
    Task,
    TaskCreate,
    TaskFilters,
    TaskUpdate,
    ValidationFailure,
)
from taskflow_cli.query import by_id, compile_task_filters, resolve_sort
from taskflow_cli.repositories import ProjectRepository, TaskRepository
from taskflow_cli.utils.logger import get_logger


class TaskService:
    """Service for task business logic.

    This service encapsulates business rules and orchestrates task operations
    using the task repository. The project repository is used to check that
    a referenced project belongs to the caller.
    """

    def __init__(
        self,
        task_repository: TaskRepository,
        project_repository: ProjectRepository,
    ):
        """Initialize the task service.

        Args:
            task_repository: TaskRepository implementation for data access
            project_repository: ProjectRepository used for reference checks
        """
        self.repository = task_repository
        self.project_repository = project_repository

    async def list_tasks(
        self,
        user_id: str,
        *,
        status: str | None = None,
        project_id: str | None = None,
        search: str | None = None,
        sort: str | None = None,
        now: datetime | None = None,
    ) -> list[Task]:
        """List the caller's tasks with filtering and ordering.

        Args:
            user_id: Identity of the caller
            status: "active", "completed", "archived" or "overdue"; any other
                value adds no constraint
            project_id: Project id, or legacy project name
            search: Case-insensitive substring of title or description
            sort: "created" (default), "dueDate", "dueDateDesc", "priority"
                or "alphabetical"; unknown keys fall back to "created"
            now: Reference time for "overdue" (defaults to current UTC)

        Returns:
            List of Task objects matching the criteria, in sort order

        Raises:
            DataAccessError: If the store fails; no partial list is returned
        """
        filters = TaskFilters(
            status=status,
            project_id=project_id,
            search=search,
            sort=sort,
        )
        predicate = compile_task_filters(filters, now)
        plan = resolve_sort(filters.sort)

        tasks = await self.repository.find(user_id, predicate, plan.order_by)
        tasks = plan.apply(tasks)

        get_logger("services").debug(
            "listed %d task(s) status=%r project=%r sort=%r",
            len(tasks),
            status,
            project_id,
            sort,
        )
        return tasks

    async def get_task(self, user_id: str, task_id: str) -> Task:
        """Get a specific task by ID.

        Raises:
            NotFoundError: If the task does not exist or is not owned by the caller
        """
        task = await self.repository.find_one(user_id, by_id(task_id))
        if task is None:
            raise NotFoundError("Task", task_id)
        return task

    async def create_task(
        self,
        user_id: str,
        title: str,
        *,
        description: str | None = None,
        priority: str | None = DEFAULT_PRIORITY,
        due_date: datetime | None = None,
        subtasks: list[dict[str, Any]] | list[Subtask] | None = None,
        tags: list[str] | None = None,
        project: str | None = None,
        project_id: str | None = None,
    ) -> Task:
        """Create a new task owned by the caller.

        Args:
            user_id: Identity of the caller
            title: Task title (required)
            description: Optional detailed description
            priority: "High", "Medium" or "Low"; None stores no priority
            due_date: Optional due date
            subtasks: Initial checklist items
            tags: Tag strings
            project: Legacy free-text project name
            project_id: One of the caller's projects

        Returns:
            Created Task object

        Raises:
            ValidationFailure: If the title is missing or a field is malformed
            NotFoundError: If project_id does not name one of the caller's projects
        """
        try:
            task_data = TaskCreate(
                title=title,
                description=description,
                priority=priority,
                due_date=due_date,
                subtasks=subtasks or [],
                tags=tags or [],
                project=project,
                project_id=project_id,
            )
        except ValidationError as e:
            raise ValidationFailure.from_pydantic(e) from e

        if task_data.project_id is not None:
            await self._require_project(user_id, task_data.project_id)

        task = await self.repository.create(user_id, task_data)
        get_logger("services").info("created task %s", task.id)
        return task

    async def update_task(
        self, user_id: str, task_id: str, /, **changes: Any
    ) -> Task:
        """Update an existing task.

        Only the keyword arguments actually passed are written; passing
        ``None`` clears a nullable field such as ``project_id`` or
        ``due_date``.

        Raises:
            ValidationFailure: If a field is malformed or a required one is cleared
            NotFoundError: If the task, or a newly referenced project, is not
                owned by the caller
        """
        try:
            updates = TaskUpdate(**changes)
        except ValidationError as e:
            raise ValidationFailure.from_pydantic(e) from e

        values = updates.changes()
        if values.get("project_id") is not None:
            await self._require_project(user_id, values["project_id"])

        count = await self.repository.update_matching(user_id, by_id(task_id), values)
        if count == 0:
            raise NotFoundError("Task", task_id)
        return await self.get_task(user_id, task_id)

    async def delete_task(self, user_id: str, task_id: str) -> None:
        """Delete a task.

        Raises:
            NotFoundError: If the task does not exist or is not owned by the caller
        """
        count = await self.repository.delete_matching(user_id, by_id(task_id))
        if count == 0:
            raise NotFoundError("Task", task_id)
        get_logger("services").info("deleted task %s", task_id)

    async def complete_task(self, user_id: str, task_id: str) -> Task:
        """Mark a task as completed."""
        return await self.update_task(user_id, task_id, completed=True)

    async def reopen_task(self, user_id: str, task_id: str) -> Task:
        """Mark a completed task as not completed."""
        return await self.update_task(user_id, task_id, completed=False)

    async def archive_task(self, user_id: str, task_id: str) -> Task:
        return await self.update_task(user_id, task_id, archived=True)

    async def unarchive_task(self, user_id: str, task_id: str) -> Task:
        return await self.update_task(user_id, task_id, archived=False)

    async def toggle_subtask(self, user_id: str, task_id: str, index: int) -> Task:
        """Flip the completion flag of the subtask at ``index`` (0-based).

        Raises:
            ValidationFailure: If the task has no subtask at that position
        """
        task = await self.get_task(user_id, task_id)
        if not 0 <= index < len(task.subtasks):
            raise ValidationFailure(
                f"Task {task_id} has no subtask #{index + 1}", ["subtasks"]
            )

        subtasks = [subtask.model_copy() for subtask in task.subtasks]
        subtasks[index].completed = not subtasks[index].completed
        return await self.update_task(user_id, task_id, subtasks=subtasks)

    async def _require_project(self, user_id: str, project_id: str) -> None:
        project = await self.project_repository.find_one(user_id, by_id(project_id))
        if project is None:
            raise NotFoundError("Project", project_id)


def get_task_service(profile: str = "default") -> TaskService:
    """Factory function to get a TaskService instance."""
    from taskflow_cli.services.storage import get_storage

    storage = get_storage(profile)
    return TaskService(storage.task_repository, storage.project_repository)
