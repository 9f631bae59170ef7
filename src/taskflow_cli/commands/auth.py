"""Authentication commands."""

import typer
from rich.prompt import Prompt

from taskflow_cli.config import get_config_manager
from taskflow_cli.services.auth_service import get_auth_service, load_session_token
from taskflow_cli.utils.typer_helpers import SuggestingGroup
from taskflow_cli.utils.ui.console import get_console
from taskflow_cli.utils.ui.formatters import format_info, format_output, format_success

from .decorators import command_wrapper
from .helpers import output_format

app = typer.Typer(cls=SuggestingGroup, help="Authentication commands")
console = get_console()


@app.command("register")
@command_wrapper(auth_required=False)
async def register(
    email: str = typer.Option(..., "--email", prompt=True, help="Email address"),
    name: str = typer.Option(..., "--name", prompt=True, help="Display name"),
    password: str = typer.Option(
        ...,
        "--password",
        prompt=True,
        hide_input=True,
        confirmation_prompt=True,
        help="Password (at least 8 characters)",
    ),
) -> None:
    """Create an account in the local store."""
    user = await get_auth_service().register(email, name, password)
    format_success(f"Registered {user.email}. Use 'taskflow auth login' to sign in.")


@app.command("login")
@command_wrapper(auth_required=False)
async def login(
    email: str | None = typer.Option(None, "--email", help="Email address"),
    password: str | None = typer.Option(None, "--password", help="Password"),
) -> None:
    """Log in and remember the session for later commands."""
    if not email:
        email = Prompt.ask("Email")
    if not password:
        password = Prompt.ask("Password", password=True)

    token = await get_auth_service().login(email, password)
    get_config_manager().save_credentials(token, email)
    format_success(f"Logged in as {email}")


@app.command("logout")
@command_wrapper(auth_required=False)
async def logout() -> None:
    """End the current session."""
    token = load_session_token()
    if token is None:
        format_info("Not logged in")
        return

    await get_auth_service().logout(token)
    get_config_manager().clear_credentials()
    format_success("Logged out")


@app.command("whoami")
@command_wrapper
async def whoami(
    output: str | None = typer.Option(None, "--output", "-o", help="Output format"),
) -> None:
    """Show the logged-in user."""
    user = await get_auth_service().current_user(load_session_token())
    format_output(user.model_dump(mode="json"), output_format(output))
