"""Services module for Taskflow CLI - Business logic layer."""

from .analytics_service import AnalyticsService
from .auth_service import AuthService
from .project_service import ProjectService
from .task_service import TaskService

__all__ = [
    "TaskService",
    "ProjectService",
    "AuthService",
    "AnalyticsService",
]
