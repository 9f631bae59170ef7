"""SQLite adapter module - Local database storage implementation."""

from taskflow_cli.adapters.sqlite.connection import (
    DatabaseConnection,
    close_connection,
    get_connection,
)
from taskflow_cli.adapters.sqlite.project_repository import SqliteProjectRepository
from taskflow_cli.adapters.sqlite.task_repository import SqliteTaskRepository
from taskflow_cli.adapters.sqlite.user_repository import (
    SqliteUserRepository,
    get_system_timezone,
)

__all__ = [
    "DatabaseConnection",
    "get_connection",
    "close_connection",
    "SqliteTaskRepository",
    "SqliteProjectRepository",
    "SqliteUserRepository",
    "get_system_timezone",
]
