"""Main entry point for Taskflow CLI."""

import typer

from taskflow_cli import __version__
from taskflow_cli.commands import analytics, auth, config, projects, tasks
from taskflow_cli.commands.calendar_command import show_calendar
from taskflow_cli.config import get_config_manager
from taskflow_cli.utils.logger import set_level
from taskflow_cli.utils.typer_helpers import SuggestingGroup
from taskflow_cli.utils.ui.console import get_console

# Create main app with custom group class
app = typer.Typer(
    name="taskflow",
    cls=SuggestingGroup,
    help="Personal task and project management from the command line",
    no_args_is_help=True,
)

console = get_console()


@app.callback()
def main() -> None:
    # Runs before every subcommand
    set_level(get_config_manager().config.log.level)


# Add subcommands
app.add_typer(auth.app, name="auth", help="Authentication commands")
app.add_typer(tasks.app, name="tasks", help="Task management commands")
app.add_typer(projects.app, name="projects", help="Project management commands")
app.add_typer(config.app, name="config", help="Configuration management")
app.add_typer(
    analytics.app, name="analytics", help="Analytics and productivity insights"
)
app.command("calendar")(show_calendar)


# Add top-level commands
@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]Taskflow CLI[/bold] version [cyan]{__version__}[/cyan]")


if __name__ == "__main__":
    app()
