"""Output formatters for different formats."""

import json
import re
from datetime import UTC, datetime
from typing import Any

import yaml
from rich.markup import escape
from rich.table import Table

from taskflow_cli.models import ProjectReference
from taskflow_cli.utils.datetime_utils import parse_datetime
from taskflow_cli.utils.ui.console import get_console

console = get_console()

OUTPUT_FORMATS = ("pretty", "table", "json", "yaml")

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}$")


def format_output(data: Any, output_format: str = "pretty") -> None:
    """Format and display output based on format."""
    if output_format == "json":
        print(json.dumps(data, indent=2, default=str))
    elif output_format == "yaml":
        print(yaml.dump(_plain(data), default_flow_style=False, sort_keys=False))
    elif output_format == "table":
        format_table(data)
    else:
        format_pretty(data)


def _plain(data: Any) -> Any:
    """Round-trip through JSON so yaml only sees builtin types."""
    return json.loads(json.dumps(data, default=str))


def format_table(data: Any) -> None:
    """Format data as a table."""
    if not data:
        console.print("[yellow]No data to display[/yellow]")
        return

    if isinstance(data, list):
        format_dict_table(data)
    elif isinstance(data, dict):
        if "tasks" in data or "projects" in data:
            items = data.get("tasks") or data.get("projects") or []
            format_dict_table(items)
        else:
            format_single_item(data)
    else:
        console.print(data)


def _cell(value: Any) -> str:
    if isinstance(value, bool):
        return "✓" if value else "✗"
    if isinstance(value, list):
        return ", ".join(_cell(v) if not isinstance(v, dict) else v.get("title", "") for v in value)
    if value is None:
        return "-"
    return str(value)


def format_dict_table(items: list[dict]) -> None:
    """Format a list of dictionaries as a table."""
    if not items:
        console.print("[yellow]No items found[/yellow]")
        return

    columns = list(items[0].keys())
    table = Table(show_header=True, header_style="bold magenta")
    for col in columns:
        table.add_column(col.replace("_", " ").title())

    for item in items:
        table.add_row(*[_cell(item.get(col)) for col in columns])

    console.print(table)


def format_single_item(item: dict) -> None:
    """Format a single item as key-value pairs."""
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="white")

    for key, value in item.items():
        table.add_row(key.replace("_", " ").title(), _cell(value))

    console.print(table)


def format_error(message: str) -> None:
    """Format and display an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def format_info(message: str) -> None:
    """Format and display an info message."""
    console.print(f"[bold blue]Info:[/bold blue] {message}")


# ============================================================================
# Pretty Format Implementation
# ============================================================================

PRIORITY_ICONS = {
    "High": "🔴",
    "Medium": "🟡",
    "Low": "🟢",
}

PRIORITY_COLORS = {
    "High": "bold red",
    "Medium": "bold yellow",
    "Low": "green",
}


def format_pretty(data: Any) -> None:
    """Human-friendly rendering for task and project payloads."""
    if isinstance(data, dict) and "tasks" in data:
        format_tasks_pretty(data["tasks"])
    elif isinstance(data, dict) and "projects" in data:
        format_projects_pretty(data["projects"])
    elif isinstance(data, dict):
        format_single_item(data)
    else:
        format_table(data)


def format_due(value: Any, now: datetime | None = None) -> str:
    """Render a due date, highlighting past dates."""
    due = parse_datetime(value)
    if due is None:
        return ""
    now = now or datetime.now(UTC)
    text = due.strftime("%Y-%m-%d %H:%M")
    if due < now:
        return f"[red]{text}[/red]"
    return f"[cyan]{text}[/cyan]"


def format_task_line(task: dict) -> str:
    """One line per task; the order of the input list is kept."""
    check = "[green]✓[/green]" if task.get("completed") else "○"
    priority = task.get("priority")
    icon = PRIORITY_ICONS.get(priority, "⚪")
    color = PRIORITY_COLORS.get(priority, "dim")
    parts = [f"{check} {icon} [{color}]{escape(task.get('title', ''))}[/{color}]"]

    project = ProjectReference.of(task)
    if project.is_legacy:
        parts.append(f"[dim]@{escape(project.label)}[/dim]")
    elif project.is_set:
        parts.append(f"[blue]@{project.label}[/blue]")

    due = format_due(task.get("due_date"))
    if due:
        parts.append(f"📅 {due}")
    if task.get("archived"):
        parts.append("[dim](archived)[/dim]")
    tags = task.get("tags") or []
    if tags:
        parts.append(" ".join(f"[magenta]#{escape(tag)}[/magenta]" for tag in tags))
    subtasks = task.get("subtasks") or []
    if subtasks:
        done = sum(1 for sub in subtasks if sub.get("completed"))
        parts.append(f"[dim]{done}/{len(subtasks)}[/dim]")
    parts.append(f"[dim]{str(task.get('id', ''))[:8]}[/dim]")
    return "  ".join(parts)


def format_tasks_pretty(tasks: list[dict]) -> None:
    if not tasks:
        console.print("[yellow]No tasks found[/yellow]")
        return
    for task in tasks:
        console.print(format_task_line(task))
    console.print(f"\n[dim]{len(tasks)} task(s)[/dim]")


def format_projects_pretty(projects: list[dict]) -> None:
    if not projects:
        console.print("[yellow]No projects found[/yellow]")
        return
    for project in projects:
        color = project.get("color") or ""
        swatch = f"[{color}]■[/]" if _HEX_COLOR.match(color) else "■"
        console.print(
            f"{swatch} [bold]{escape(project.get('name', ''))}[/bold]"
            f"  [dim]{str(project.get('id', ''))[:8]}[/dim]"
        )
        if project.get("description"):
            console.print(f"    {escape(project['description'])}")
