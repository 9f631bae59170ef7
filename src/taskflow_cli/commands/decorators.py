"""Decorators for command functions."""

import asyncio
import functools
import inspect
import time
import traceback
from collections.abc import Callable

import typer

from taskflow_cli.models import AuthenticationError, TaskflowError
from taskflow_cli.services.auth_service import load_session_token
from taskflow_cli.utils.exit_codes import ERROR_GENERAL, exit_code_for
from taskflow_cli.utils.logger import get_logger
from taskflow_cli.utils.ui.formatters import format_error


def _require_auth() -> None:
    """Require a saved session; its validity is checked when it is resolved."""
    if load_session_token() is None:
        raise AuthenticationError("Not logged in. Use 'taskflow auth login' first.")


class AppError(Exception):
    """Custom application error with exit code."""

    def __init__(self, message: str, exit_code: int = ERROR_GENERAL):
        super().__init__(message)
        self.exit_code = exit_code


def command_wrapper(_func: Callable | None = None, *, auth_required: bool = True):
    """Decorator to wrap command functions with common functionality."""

    def decorator(func: Callable):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            logger = get_logger()
            cmd = func.__name__
            start = time.monotonic()
            logger.info("command started: %s", cmd)
            try:
                # 1. Handle Auth
                if auth_required:
                    _require_auth()

                # 2. Run Sync or Async
                if inspect.iscoroutinefunction(func):
                    result = asyncio.run(func(*args, **kwargs))
                else:
                    result = func(*args, **kwargs)

                elapsed = time.monotonic() - start
                logger.info("command completed: %s (%.3fs)", cmd, elapsed)
                return result

            except (AppError, TaskflowError) as e:
                elapsed = time.monotonic() - start
                logger.error(
                    "command failed: %s (%.3fs) - %s: %s",
                    cmd,
                    elapsed,
                    type(e).__name__,
                    str(e),
                )
                format_error(str(e))
                code = e.exit_code if isinstance(e, AppError) else exit_code_for(e)
                raise typer.Exit(code=code) from e

            except typer.Exit:
                # Re-raise Typer's own exits (like --help or explicit Exit(0))
                raise

            except Exception as e:
                elapsed = time.monotonic() - start
                logger.error(
                    "command failed: %s (%.3fs) - %s\n%s",
                    cmd,
                    elapsed,
                    str(e),
                    traceback.format_exc(),
                )
                # Generic fallback for unexpected crashes
                format_error(f"An unexpected error occurred: {str(e)}")
                raise typer.Exit(code=ERROR_GENERAL) from e

        return wrapper

    if _func is None:
        return decorator
    return decorator(_func)
