"""Repository wiring for the configured SQLite store."""

from __future__ import annotations

from taskflow_cli.adapters.sqlite import (
    SqliteProjectRepository,
    SqliteTaskRepository,
    SqliteUserRepository,
)
from taskflow_cli.config import get_config_manager
from taskflow_cli.repositories import ProjectRepository, TaskRepository, UserRepository


class LocalStorage:
    """Provides the repositories backed by one SQLite database file.

    Usage:
        storage = LocalStorage(db_path="/path/to/taskflow.db")
        service = TaskService(storage.task_repository, storage.project_repository)
    """

    def __init__(self, db_path: str | None = None):
        self.db_path = db_path
        self._task_repository: TaskRepository | None = None
        self._project_repository: ProjectRepository | None = None
        self._user_repository: UserRepository | None = None

    @property
    def task_repository(self) -> TaskRepository:
        if self._task_repository is None:
            self._task_repository = SqliteTaskRepository(self.db_path)
        return self._task_repository

    @property
    def project_repository(self) -> ProjectRepository:
        if self._project_repository is None:
            self._project_repository = SqliteProjectRepository(self.db_path)
        return self._project_repository

    @property
    def user_repository(self) -> UserRepository:
        if self._user_repository is None:
            self._user_repository = SqliteUserRepository(self.db_path)
        return self._user_repository


def get_storage(profile: str = "default") -> LocalStorage:
    """Build storage for the database path the profile resolves to."""
    return LocalStorage(get_config_manager(profile).resolve_db_path())
