"""Task management commands."""

from datetime import datetime
from typing import Any

import typer

from taskflow_cli.query import SORT_KEYS, TASK_STATUSES
from taskflow_cli.services.auth_service import resolve_current_user_id
from taskflow_cli.services.task_service import get_task_service
from taskflow_cli.utils.exit_codes import ERROR_INVALID_ARGS
from taskflow_cli.utils.typer_helpers import SuggestingGroup
from taskflow_cli.utils.ui.formatters import format_output, format_success
from taskflow_cli.utils.uuid_utils import resolve_project_id, resolve_task_id

from .decorators import AppError, command_wrapper
from .helpers import DUE_DATE_FORMATS, default_sort, output_format, parse_priority

app = typer.Typer(cls=SuggestingGroup, help="Task management commands")


def _task_payload(task) -> dict[str, Any]:
    return task.model_dump(mode="json")


@app.command("list")
@command_wrapper
async def list_tasks(
    status: str | None = typer.Option(
        None, "--status", "-s", help=f"Filter by status ({', '.join(TASK_STATUSES)})"
    ),
    project: str | None = typer.Option(
        None, "--project", "-p", help="Project ID or legacy project name"
    ),
    search: str | None = typer.Option(None, "--search", "-q", help="Search title and description"),
    sort: str | None = typer.Option(
        None, "--sort", help=f"Sort order ({', '.join(SORT_KEYS)})"
    ),
    output: str | None = typer.Option(None, "--output", "-o", help="Output format"),
) -> None:
    """List tasks."""
    user_id = await resolve_current_user_id()
    task_service = get_task_service()

    tasks = await task_service.list_tasks(
        user_id,
        status=status,
        project_id=project,
        search=search,
        sort=default_sort(sort),
    )
    format_output({"tasks": [_task_payload(t) for t in tasks]}, output_format(output))


@app.command("get")
@command_wrapper
async def get_task(
    task_id: str = typer.Argument(..., help="Task ID or ID prefix"),
    output: str | None = typer.Option(None, "--output", "-o", help="Output format"),
) -> None:
    """Get task details."""
    user_id = await resolve_current_user_id()
    task_service = get_task_service()

    task_id = await resolve_task_id(task_id, task_service.repository, user_id)
    task = await task_service.get_task(user_id, task_id)
    format_output(_task_payload(task), output_format(output))


@app.command("create")
@command_wrapper
async def create_task(
    title: str = typer.Argument(..., help="Task title"),
    description: str | None = typer.Option(None, "--description", "-d", help="Description"),
    priority: str = typer.Option("Medium", "--priority", help="High, Medium, Low or none"),
    due: datetime | None = typer.Option(
        None, "--due", formats=DUE_DATE_FORMATS, help="Due date (UTC)"
    ),
    tags: list[str] | None = typer.Option(None, "--tag", "-t", help="Tag (repeatable)"),
    subtasks: list[str] | None = typer.Option(
        None, "--subtask", help="Subtask title (repeatable)"
    ),
    project_id: str | None = typer.Option(
        None, "--project-id", help="Project ID, ID prefix or name"
    ),
    project: str | None = typer.Option(
        None, "--project-name", help="Legacy free-text project name"
    ),
    output: str | None = typer.Option(None, "--output", "-o", help="Output format"),
) -> None:
    """Create a new task."""
    user_id = await resolve_current_user_id()
    task_service = get_task_service()

    if project_id is not None:
        project_id = await resolve_project_id(
            project_id, task_service.project_repository, user_id
        )

    task = await task_service.create_task(
        user_id,
        title,
        description=description,
        priority=parse_priority(priority),
        due_date=due,
        tags=tags or [],
        subtasks=[{"title": s} for s in subtasks or []],
        project=project,
        project_id=project_id,
    )
    format_success(f"Task created: {task.id}")
    format_output(_task_payload(task), output_format(output))


@app.command("update")
@command_wrapper
async def update_task(
    task_id: str = typer.Argument(..., help="Task ID or ID prefix"),
    title: str | None = typer.Option(None, "--title", help="New title"),
    description: str | None = typer.Option(None, "--description", "-d", help="Description"),
    priority: str | None = typer.Option(None, "--priority", help="High, Medium, Low or none"),
    due: datetime | None = typer.Option(
        None, "--due", formats=DUE_DATE_FORMATS, help="Due date (UTC)"
    ),
    clear_due: bool = typer.Option(False, "--clear-due", help="Remove the due date"),
    tags: list[str] | None = typer.Option(
        None, "--tag", "-t", help="Replace tags (repeatable)"
    ),
    project_id: str | None = typer.Option(
        None, "--project-id", help="Project ID, ID prefix or name"
    ),
    clear_project: bool = typer.Option(
        False, "--clear-project", help="Detach the task from its project"
    ),
    project: str | None = typer.Option(
        None, "--project-name", help="Legacy free-text project name"
    ),
    output: str | None = typer.Option(None, "--output", "-o", help="Output format"),
) -> None:
    """Update a task; only the given options change."""
    changes: dict[str, Any] = {}
    if title is not None:
        changes["title"] = title
    if description is not None:
        changes["description"] = description
    if priority is not None:
        changes["priority"] = parse_priority(priority)
    if due is not None or clear_due:
        changes["due_date"] = None if clear_due else due
    if tags is not None:
        changes["tags"] = tags
    if project is not None:
        changes["project"] = project
    if clear_project:
        changes["project_id"] = None

    if not changes and project_id is None:
        raise AppError("No updates specified", ERROR_INVALID_ARGS)

    user_id = await resolve_current_user_id()
    task_service = get_task_service()

    if project_id is not None and not clear_project:
        changes["project_id"] = await resolve_project_id(
            project_id, task_service.project_repository, user_id
        )

    task_id = await resolve_task_id(task_id, task_service.repository, user_id)
    task = await task_service.update_task(user_id, task_id, **changes)
    format_success(f"Task updated: {task.id}")
    format_output(_task_payload(task), output_format(output))


@app.command("delete")
@command_wrapper
async def delete_task(
    task_id: str = typer.Argument(..., help="Task ID or ID prefix"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete a task."""
    user_id = await resolve_current_user_id()
    task_service = get_task_service()

    task_id = await resolve_task_id(task_id, task_service.repository, user_id)
    if not yes and not typer.confirm(f"Are you sure you want to delete task {task_id}?"):
        raise typer.Exit(0)

    await task_service.delete_task(user_id, task_id)
    format_success(f"Task deleted: {task_id}")


_PAST_TENSE = {
    "complete": "completed",
    "reopen": "reopened",
    "archive": "archived",
    "unarchive": "unarchived",
}


async def _set_state(task_id: str, action: str) -> None:
    user_id = await resolve_current_user_id()
    task_service = get_task_service()

    task_id = await resolve_task_id(task_id, task_service.repository, user_id)
    handler = getattr(task_service, f"{action}_task")
    task = await handler(user_id, task_id)
    format_success(f"Task {_PAST_TENSE[action]}: {task.title}")


@app.command("complete")
@command_wrapper
async def complete_task(
    task_id: str = typer.Argument(..., help="Task ID or ID prefix"),
) -> None:
    """Mark a task as completed."""
    await _set_state(task_id, "complete")


@app.command("reopen")
@command_wrapper
async def reopen_task(
    task_id: str = typer.Argument(..., help="Task ID or ID prefix"),
) -> None:
    """Mark a completed task as not completed."""
    await _set_state(task_id, "reopen")


@app.command("archive")
@command_wrapper
async def archive_task(
    task_id: str = typer.Argument(..., help="Task ID or ID prefix"),
) -> None:
    """Archive a task."""
    await _set_state(task_id, "archive")


@app.command("unarchive")
@command_wrapper
async def unarchive_task(
    task_id: str = typer.Argument(..., help="Task ID or ID prefix"),
) -> None:
    """Restore an archived task."""
    await _set_state(task_id, "unarchive")


@app.command("subtask")
@command_wrapper
async def toggle_subtask(
    task_id: str = typer.Argument(..., help="Task ID or ID prefix"),
    number: int = typer.Argument(..., min=1, help="Subtask number, starting at 1"),
    output: str | None = typer.Option(None, "--output", "-o", help="Output format"),
) -> None:
    """Toggle a subtask between done and not done."""
    user_id = await resolve_current_user_id()
    task_service = get_task_service()

    task_id = await resolve_task_id(task_id, task_service.repository, user_id)
    task = await task_service.toggle_subtask(user_id, task_id, number - 1)
    state = "done" if task.subtasks[number - 1].completed else "not done"
    format_success(f"Subtask {number} marked {state}")
    format_output(_task_payload(task), output_format(output))
