"""Configuration management commands."""

from typing import Optional

import typer

from taskflow_cli.config import get_config_manager
from taskflow_cli.utils.exit_codes import ERROR_NOT_FOUND
from taskflow_cli.utils.logger import log_file_path
from taskflow_cli.utils.typer_helpers import SuggestingGroup
from taskflow_cli.utils.ui.console import get_console
from taskflow_cli.utils.ui.formatters import format_output, format_success

from .decorators import AppError, command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Configuration management commands")
console = get_console()


def parse_value(value: str) -> str | int | bool | None:
    """Convert a command-line string to the type the config expects."""
    if value.lower() in ("true", "false"):
        return value.lower() == "true"
    if value.lower() in ("null", "none"):
        return None
    if value.isdigit():
        return int(value)
    return value


@app.command("show")
@command_wrapper(auth_required=False)
def show_config(
    profile: str = typer.Option("default", "--profile", help="Profile name"),
    output: str = typer.Option("yaml", "--output", "-o", help="Output format"),
) -> None:
    """Show the current configuration."""
    config_manager = get_config_manager(profile)
    format_output(config_manager.config.model_dump(), output)


@app.command("get")
@command_wrapper(auth_required=False)
def get_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., output.format)"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Get a configuration value."""
    config_manager = get_config_manager(profile)
    value = config_manager.get(key)
    if value is None:
        raise AppError(f"Configuration key '{key}' not set", ERROR_NOT_FOUND)
    console.print(value)


@app.command("set")
@command_wrapper(auth_required=False)
def set_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., output.format)"),
    value: str = typer.Argument(..., help="Configuration value"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Set a configuration value."""
    config_manager = get_config_manager(profile)
    parsed_value = parse_value(value)
    config_manager.set(key, parsed_value)
    format_success(f"Configuration '{key}' set to '{parsed_value}'")


@app.command("reset")
@command_wrapper(auth_required=False)
def reset_config(
    key: Optional[str] = typer.Argument(None, help="Configuration key to reset"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Reset configuration to defaults."""
    if not yes:
        msg = "entire configuration" if not key else f"'{key}'"
        if not typer.confirm(f"Are you sure you want to reset {msg}?"):
            raise typer.Exit(0)

    config_manager = get_config_manager(profile)
    config_manager.reset(key)

    if key:
        format_success(f"Configuration '{key}' reset to default")
    else:
        format_success("Configuration reset to defaults")


@app.command("paths")
@command_wrapper(auth_required=False)
def show_paths(
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Show where configuration, credentials and logs are stored."""
    config_manager = get_config_manager(profile)
    console.print(f"config:      {config_manager.config_file}", soft_wrap=True)
    console.print(f"credentials: {config_manager.credentials_file}", soft_wrap=True)
    console.print(f"log:         {log_file_path()}", soft_wrap=True)
