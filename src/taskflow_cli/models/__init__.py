"""Taskflow domain models.

This package contains the Pydantic models that represent the core domain
entities (users, projects, tasks) and the exceptions raised while working
with them.
"""

from .core import (
    DEFAULT_PRIORITY,
    DEFAULT_PROJECT_COLOR,
    MIN_PASSWORD_LENGTH,
    Priority,
    Project,
    ProjectCreate,
    ProjectReference,
    ProjectUpdate,
    Subtask,
    Task,
    TaskCreate,
    TaskFilters,
    TaskUpdate,
    User,
    UserCreate,
)
from .exceptions import (
    AuthenticationError,
    ConflictError,
    DataAccessError,
    NotFoundError,
    TaskflowError,
    ValidationFailure,
)

__all__ = [
    # Task models
    "Task",
    "TaskCreate",
    "TaskUpdate",
    "TaskFilters",
    "Subtask",
    "Priority",
    "DEFAULT_PRIORITY",
    # Project models
    "Project",
    "ProjectCreate",
    "ProjectUpdate",
    "ProjectReference",
    "DEFAULT_PROJECT_COLOR",
    # User models
    "User",
    "UserCreate",
    "MIN_PASSWORD_LENGTH",
    # Errors
    "TaskflowError",
    "NotFoundError",
    "ValidationFailure",
    "DataAccessError",
    "AuthenticationError",
    "ConflictError",
]
