"""Typer helper utilities."""

from difflib import get_close_matches

import typer
from typer.core import TyperGroup

from taskflow_cli.utils.ui.console import get_console


class SuggestingGroup(TyperGroup):
    """Custom Typer group that suggests commands on typos."""

    def resolve_command(self, ctx, args):
        """Override to provide command suggestions on errors."""
        try:
            return super().resolve_command(ctx, args)
        except Exception as e:
            if args:
                attempted = args[0]
                suggestions = get_close_matches(
                    attempted, list(self.commands.keys()), n=3, cutoff=0.6
                )

                if suggestions:
                    console = get_console()
                    console.print(
                        f'[red]Error:[/red] unknown command "{attempted}" for "{ctx.info_name}"'
                    )
                    console.print()
                    if len(suggestions) == 1:
                        console.print("[yellow]Did you mean this?[/yellow]")
                    else:
                        console.print("[yellow]Did you mean one of these?[/yellow]")
                    for suggestion in suggestions:
                        console.print(f"        {suggestion}")
                    raise typer.Exit(2) from e
            raise
