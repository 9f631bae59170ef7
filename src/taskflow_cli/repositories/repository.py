"""Repository abstraction layer for Taskflow CLI.

This module defines the abstract base classes (interfaces) for all repository types,
following the hexagonal architecture (Ports & Adapters) pattern.

Every project and task operation takes the caller's identity first. Adapters
AND it onto whatever predicate they are given, so a document owned by
someone else can never be read, changed or removed through these ports.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from contextlib import AbstractContextManager, nullcontext
from datetime import datetime
from typing import Any

from taskflow_cli.models import Project, ProjectCreate, Task, TaskCreate, User
from taskflow_cli.query import OrderBy, Predicate


class TaskRepository(ABC):
    """Abstract base class for task persistence operations."""

    @abstractmethod
    async def find(
        self,
        owner_id: str,
        predicate: Predicate | None = None,
        order_by: Sequence[OrderBy] = (),
    ) -> list[Task]:
        """Return the owner's tasks matching ``predicate`` in the given order.

        Args:
            owner_id: Identity of the caller
            predicate: Additional constraint; None matches every owned task
            order_by: Ordering terms applied by the store

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
            DataAccessError: If the store fails
        """
        raise NotImplementedError("TaskRepository.find() must be implemented by adapter")

    @abstractmethod
    async def find_one(self, owner_id: str, predicate: Predicate) -> Task | None:
        """Return the first owned task matching ``predicate``, or None."""
        raise NotImplementedError(
            "TaskRepository.find_one() must be implemented by adapter"
        )

    @abstractmethod
    async def create(self, owner_id: str, task_data: TaskCreate) -> Task:
        """Create a new task owned by ``owner_id``.

        Args:
            owner_id: Identity of the caller, stored as the task owner
            task_data: TaskCreate object with task details

        Returns:
            Created Task object with generated ID and timestamps
        """
        raise NotImplementedError(
            "TaskRepository.create() must be implemented by adapter"
        )

    @abstractmethod
    async def update_matching(
        self, owner_id: str, predicate: Predicate, changes: dict[str, Any]
    ) -> int:
        """Apply ``changes`` to every owned task matching ``predicate``.

        Returns:
            Number of tasks changed (0 when nothing owned matched)
        """
        raise NotImplementedError(
            "TaskRepository.update_matching() must be implemented by adapter"
        )

    @abstractmethod
    async def delete_matching(self, owner_id: str, predicate: Predicate) -> int:
        """Delete every owned task matching ``predicate``; return the count."""
        raise NotImplementedError(
            "TaskRepository.delete_matching() must be implemented by adapter"
        )

    @abstractmethod
    async def unset_project_reference(self, owner_id: str, project_id: str) -> int:
        """Clear ``project_id`` on the owner's tasks that reference it.

        The legacy project name is left untouched.

        Returns:
            Number of tasks detached
        """
        raise NotImplementedError(
            "TaskRepository.unset_project_reference() must be implemented by adapter"
        )

    def transaction(self) -> AbstractContextManager:
        """Group several writes so they apply together or not at all.

        Stores without transactions keep the default, a no-op context.
        """
        return nullcontext()


class ProjectRepository(ABC):
    """Abstract base class for project persistence operations."""

    @abstractmethod
    async def find(
        self,
        owner_id: str,
        predicate: Predicate | None = None,
        order_by: Sequence[OrderBy] = (),
    ) -> list[Project]:
        """Return the owner's projects matching ``predicate``."""
        raise NotImplementedError(
            "ProjectRepository.find() must be implemented by adapter"
        )

    @abstractmethod
    async def find_one(self, owner_id: str, predicate: Predicate) -> Project | None:
        """Return the first owned project matching ``predicate``, or None."""
        raise NotImplementedError(
            "ProjectRepository.find_one() must be implemented by adapter"
        )

    @abstractmethod
    async def create(self, owner_id: str, project_data: ProjectCreate) -> Project:
        """Create a new project owned by ``owner_id``."""
        raise NotImplementedError(
            "ProjectRepository.create() must be implemented by adapter"
        )

    @abstractmethod
    async def update_matching(
        self, owner_id: str, predicate: Predicate, changes: dict[str, Any]
    ) -> int:
        """Apply ``changes`` to owned projects matching ``predicate``."""
        raise NotImplementedError(
            "ProjectRepository.update_matching() must be implemented by adapter"
        )

    @abstractmethod
    async def delete_matching(self, owner_id: str, predicate: Predicate) -> int:
        """Delete owned projects matching ``predicate``; return the count."""
        raise NotImplementedError(
            "ProjectRepository.delete_matching() must be implemented by adapter"
        )

    def transaction(self) -> AbstractContextManager:
        """Group several writes so they apply together or not at all."""
        return nullcontext()


class UserRepository(ABC):
    """Abstract base class for user accounts and login sessions.

    Password material is opaque here: the service hashes, the store only
    keeps the salt and digest it is handed.
    """

    @abstractmethod
    async def create_user(
        self,
        *,
        email: str,
        name: str,
        password_salt: str,
        password_hash: str,
        timezone: str | None = None,
    ) -> User:
        """Create a user account.

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
            ConflictError: If the email is already registered
        """
        raise NotImplementedError(
            "UserRepository.create_user() must be implemented by adapter"
        )

    @abstractmethod
    async def get_user(self, user_id: str) -> User | None:
        raise NotImplementedError(
            "UserRepository.get_user() must be implemented by adapter"
        )

    @abstractmethod
    async def get_credentials(self, email: str) -> tuple[User, str, str] | None:
        """Return ``(user, salt, hash)`` for ``email``, or None."""
        raise NotImplementedError(
            "UserRepository.get_credentials() must be implemented by adapter"
        )

    @abstractmethod
    async def create_session(
        self, user_id: str, token_hash: str, expires_at: datetime
    ) -> None:
        raise NotImplementedError(
            "UserRepository.create_session() must be implemented by adapter"
        )

    @abstractmethod
    async def get_session_user_id(self, token_hash: str, now: datetime) -> str | None:
        """Return the user of an unexpired session, or None."""
        raise NotImplementedError(
            "UserRepository.get_session_user_id() must be implemented by adapter"
        )

    @abstractmethod
    async def delete_session(self, token_hash: str) -> int:
        raise NotImplementedError(
            "UserRepository.delete_session() must be implemented by adapter"
        )

    @abstractmethod
    async def purge_expired_sessions(self, now: datetime) -> int:
        raise NotImplementedError(
            "UserRepository.purge_expired_sessions() must be implemented by adapter"
        )
