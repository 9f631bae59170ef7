"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from real filesystem state: config,
credentials, logs and the database all live under ``tmp_path``.
"""

from __future__ import annotations

import logging
from unittest.mock import patch

import pytest

from taskflow_cli.adapters.sqlite import (
    SqliteProjectRepository,
    SqliteTaskRepository,
    SqliteUserRepository,
    close_connection,
    get_connection,
)
from taskflow_cli.services.project_service import ProjectService
from taskflow_cli.services.task_service import TaskService
from taskflow_cli.utils.ui.console import get_console

ALICE = "user-alice"
BOB = "user-bob"


def insert_user(connection, user_id: str, email: str) -> None:
    """Seed a user row directly; the password columns are irrelevant here."""
    connection.execute(
        """
        INSERT INTO users (
            id, email, name, timezone, password_salt, password_hash,
            created_at, updated_at
        ) VALUES (?, ?, ?, 'UTC', '00', '00', ?, ?)
        """,
        (
            user_id,
            email,
            email.split("@")[0].title(),
            "2024-01-01T00:00:00.000000+00:00",
            "2024-01-01T00:00:00.000000+00:00",
        ),
    )


# ---------------------------------------------------------------------------
# Filesystem isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path, monkeypatch):
    """Redirect config, data and log directories into *tmp_path*."""
    import taskflow_cli.config as config_module
    import taskflow_cli.utils.logger as logger_module

    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.delenv("TASKFLOW_DB", raising=False)
    monkeypatch.setattr(logger_module, "_logger", None)
    monkeypatch.setattr(config_module, "_config_manager", None)

    with (
        patch("taskflow_cli.utils.logger.user_log_dir", return_value=str(home / "logs")),
        patch("taskflow_cli.config.user_config_dir", return_value=str(home / "config")),
        patch("taskflow_cli.config.user_data_dir", return_value=str(home / "data")),
    ):
        yield home

    app_logger = logging.getLogger("taskflow_cli")
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
        handler.close()


# ---------------------------------------------------------------------------
# Console
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def wide_console(monkeypatch):
    """Pin the shared console wide so CliRunner output is never wrapped."""
    monkeypatch.setattr(get_console(), "_width", 200)


# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------


@pytest.fixture
def db_path(tmp_path):
    """Path of a fresh database file; the shared connection is closed afterwards."""
    path = str(tmp_path / "taskflow.db")
    yield path
    close_connection()


@pytest.fixture
def connection(db_path):
    """Open (and migrate) the test database, seeded with two users."""
    conn = get_connection(db_path)
    insert_user(conn, ALICE, "alice@example.com")
    insert_user(conn, BOB, "bob@example.com")
    return conn


@pytest.fixture
def task_repo(db_path, connection):
    return SqliteTaskRepository(db_path)


@pytest.fixture
def project_repo(db_path, connection):
    return SqliteProjectRepository(db_path)


@pytest.fixture
def user_repo(db_path):
    return SqliteUserRepository(db_path)


@pytest.fixture
def task_service(task_repo, project_repo):
    return TaskService(task_repo, project_repo)


@pytest.fixture
def project_service(task_repo, project_repo):
    return ProjectService(project_repo, task_repo)


# ---------------------------------------------------------------------------
# Auth bypass
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def bypass_auth():
    """Skip the saved-session check in all command tests by default."""
    with patch("taskflow_cli.commands.decorators._require_auth"):
        yield
