"""Project management commands."""

import typer

from taskflow_cli.services.auth_service import resolve_current_user_id
from taskflow_cli.services.project_service import get_project_service
from taskflow_cli.utils.exit_codes import ERROR_INVALID_ARGS
from taskflow_cli.utils.typer_helpers import SuggestingGroup
from taskflow_cli.utils.ui.formatters import format_output, format_success
from taskflow_cli.utils.uuid_utils import resolve_project_id

from .decorators import AppError, command_wrapper
from .helpers import output_format

app = typer.Typer(cls=SuggestingGroup, help="Project management commands")


@app.command("list")
@command_wrapper
async def list_projects(
    output: str | None = typer.Option(None, "--output", "-o", help="Output format"),
) -> None:
    """List projects, newest first."""
    user_id = await resolve_current_user_id()
    project_service = get_project_service()

    projects = await project_service.list_projects(user_id)
    result = {"projects": [p.model_dump(mode="json") for p in projects]}
    format_output(result, output_format(output))


@app.command("get")
@command_wrapper
async def get_project(
    project_id: str = typer.Argument(..., help="Project ID, ID prefix or name"),
    output: str | None = typer.Option(None, "--output", "-o", help="Output format"),
) -> None:
    """Get project details."""
    user_id = await resolve_current_user_id()
    project_service = get_project_service()

    project_id = await resolve_project_id(project_id, project_service.repository, user_id)
    project = await project_service.get_project(user_id, project_id)
    format_output(project.model_dump(mode="json"), output_format(output))


@app.command("create")
@command_wrapper
async def create_project(
    name: str = typer.Argument(..., help="Project name"),
    description: str | None = typer.Option(None, "--description", "-d", help="Description"),
    color: str | None = typer.Option(None, "--color", help="Hex color, e.g. #ff8800"),
    output: str | None = typer.Option(None, "--output", "-o", help="Output format"),
) -> None:
    """Create a new project."""
    user_id = await resolve_current_user_id()
    project_service = get_project_service()

    project = await project_service.create_project(
        user_id, name, description=description, color=color
    )
    format_success(f"Project created: {project.id}")
    format_output(project.model_dump(mode="json"), output_format(output))


@app.command("update")
@command_wrapper
async def update_project(
    project_id: str = typer.Argument(..., help="Project ID, ID prefix or name"),
    name: str | None = typer.Option(None, "--name", help="Project name"),
    description: str | None = typer.Option(None, "--description", "-d", help="Description"),
    color: str | None = typer.Option(None, "--color", help="Hex color"),
    output: str | None = typer.Option(None, "--output", "-o", help="Output format"),
) -> None:
    """Update a project."""
    changes = {
        key: value
        for key, value in (("name", name), ("description", description), ("color", color))
        if value is not None
    }
    if not changes:
        raise AppError("No updates specified", ERROR_INVALID_ARGS)

    user_id = await resolve_current_user_id()
    project_service = get_project_service()

    project_id = await resolve_project_id(project_id, project_service.repository, user_id)
    project = await project_service.update_project(user_id, project_id, **changes)
    format_success(f"Project updated: {project_id}")
    format_output(project.model_dump(mode="json"), output_format(output))


@app.command("delete")
@command_wrapper
async def delete_project(
    project_id: str = typer.Argument(..., help="Project ID, ID prefix or name"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete a project; its tasks are kept and detached from it."""
    user_id = await resolve_current_user_id()
    project_service = get_project_service()

    project_id = await resolve_project_id(project_id, project_service.repository, user_id)
    if not yes and not typer.confirm(
        f"Are you sure you want to delete project {project_id}?"
    ):
        raise typer.Exit(0)

    detached = await project_service.delete_project(user_id, project_id)
    format_success(f"Project deleted: {project_id} ({detached} task(s) detached)")
