"""Calendar command: a month of due dates plus today and upcoming tasks."""

import calendar as month_calendar

import typer
from rich.markup import escape
from rich.table import Table

from taskflow_cli.services.analytics_service import get_analytics_service
from taskflow_cli.services.auth_service import resolve_current_user_id
from taskflow_cli.utils.datetime_utils import utc_now
from taskflow_cli.utils.ui.console import get_console
from taskflow_cli.utils.ui.formatters import format_output, format_task_line

from .decorators import command_wrapper
from .helpers import output_format

console = get_console()


def _month_grid(year: int, month: int, days: dict) -> Table:
    table = Table(title=f"{month_calendar.month_name[month]} {year}", show_lines=True)
    for name in ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"):
        table.add_column(name, vertical="top", min_width=10)

    for week in month_calendar.monthcalendar(year, month):
        cells = []
        for day in week:
            if day == 0:
                cells.append("")
                continue
            lines = [f"[bold]{day}[/bold]"]
            for task in days.get(day, []):
                style = "dim" if task.completed else "bold"
                lines.append(f"[{style}]{escape(task.title)}[/{style}]")
            cells.append("\n".join(lines))
        table.add_row(*cells)
    return table


@command_wrapper
async def show_calendar(
    year: int | None = typer.Option(None, "--year", help="Year (defaults to current)"),
    month: int | None = typer.Option(
        None, "--month", min=1, max=12, help="Month 1-12 (defaults to current)"
    ),
    output: str | None = typer.Option(None, "--output", "-o", help="Output format"),
) -> None:
    """Show tasks by due date for one month."""
    now = utc_now()
    year = year or now.year
    month = month or now.month

    user_id = await resolve_current_user_id()
    view = await get_analytics_service().calendar_month(user_id, year, month, now=now)

    fmt = output_format(output)
    if fmt != "pretty":
        format_output(
            {
                "year": view["year"],
                "month": view["month"],
                "days": {
                    str(day): [t.model_dump(mode="json") for t in tasks]
                    for day, tasks in view["days"].items()
                    if tasks
                },
                "today": [t.model_dump(mode="json") for t in view["today"]],
                "upcoming": [t.model_dump(mode="json") for t in view["upcoming"]],
            },
            fmt,
        )
        return

    console.print(_month_grid(year, month, view["days"]))

    console.print("\n[bold cyan]Today[/bold cyan]")
    if not view["today"]:
        console.print("[dim]No tasks for today.[/dim]")
    for task in view["today"]:
        console.print(format_task_line(task.model_dump(mode="json")))

    console.print("\n[bold cyan]Upcoming (7 days)[/bold cyan]")
    if not view["upcoming"]:
        console.print("[dim]No upcoming tasks.[/dim]")
    for task in view["upcoming"]:
        console.print(format_task_line(task.model_dump(mode="json")))
