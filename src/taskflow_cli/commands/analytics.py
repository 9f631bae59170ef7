"""Analytics commands: completion summary and weekly capacity."""

import typer
from rich.table import Table

from taskflow_cli.services.analytics_service import (
    DEFAULT_OVERLOAD_THRESHOLD,
    get_analytics_service,
)
from taskflow_cli.services.auth_service import resolve_current_user_id
from taskflow_cli.utils.typer_helpers import SuggestingGroup
from taskflow_cli.utils.ui.console import get_console
from taskflow_cli.utils.ui.formatters import format_output

from .decorators import command_wrapper
from .helpers import output_format

app = typer.Typer(cls=SuggestingGroup, help="Analytics and productivity insights")
console = get_console()


def render_progress_bar(value: float, max_value: float, width: int = 20) -> str:
    """Render a progress bar using block characters."""
    ratio = 0 if max_value == 0 else min(value / max_value, 1.0)
    filled = int(ratio * width)
    return "█" * filled + "░" * (width - filled)


@app.command("summary")
@command_wrapper
async def summary(
    output: str | None = typer.Option(None, "--output", "-o", help="Output format"),
) -> None:
    """Show task counts and completion rate."""
    user_id = await resolve_current_user_id()
    stats = await get_analytics_service().summary(user_id)

    fmt = output_format(output)
    if fmt != "pretty":
        format_output(stats, fmt)
        return

    console.print("\n[bold cyan]Task Summary[/bold cyan]\n")
    console.print(f"Total:     [bold]{stats['total']}[/bold]")
    console.print(f"Completed: [green]{stats['completed']}[/green]")
    console.print(f"Pending:   [yellow]{stats['pending']}[/yellow]")
    console.print(f"Overdue:   [red]{stats['overdue']}[/red]")
    console.print(f"Archived:  [dim]{stats['archived']}[/dim]")
    console.print(
        f"\nCompletion {render_progress_bar(stats['completion_rate'], 100)} "
        f"[bold]{stats['completion_rate']:.2f}%[/bold]"
    )


@app.command("week")
@command_wrapper
async def week(
    threshold: int = typer.Option(
        DEFAULT_OVERLOAD_THRESHOLD, "--threshold", min=1, help="Tasks per day that count as overload"
    ),
    output: str | None = typer.Option(None, "--output", "-o", help="Output format"),
) -> None:
    """Show tasks due on each of the next seven days."""
    user_id = await resolve_current_user_id()
    days = await get_analytics_service().weekly_capacity(
        user_id, overload_threshold=threshold
    )

    fmt = output_format(output)
    if fmt != "pretty":
        format_output(days, fmt)
        return

    table = Table(title="Weekly Capacity", show_header=True, header_style="bold magenta")
    table.add_column("Date")
    table.add_column("Tasks", justify="right")
    table.add_column("Load")
    for day in days:
        style = "bold red" if day["overloaded"] else "green"
        table.add_row(
            day["date"],
            str(day["task_count"]),
            f"[{style}]{render_progress_bar(day['task_count'], threshold, 10)}[/{style}]",
        )
    console.print(table)
