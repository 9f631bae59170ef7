"""Repository interfaces for the Taskflow CLI.

This package contains abstract base classes (ABCs) that define the contracts
for data persistence operations. These are the "Ports" in the Hexagonal Architecture.

Implementations (Adapters) are in:
- taskflow_cli.adapters.sqlite (local storage)
"""

from .repository import (
    ProjectRepository,
    TaskRepository,
    UserRepository,
)

__all__ = [
    "TaskRepository",
    "ProjectRepository",
    "UserRepository",
]
