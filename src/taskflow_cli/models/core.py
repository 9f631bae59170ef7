"""Task, project and user data models."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Annotated, Any, Literal

from pydantic import AfterValidator, BaseModel, ConfigDict, EmailStr, Field, model_validator

Priority = Literal["High", "Medium", "Low"]

DEFAULT_PRIORITY: Priority = "Medium"
DEFAULT_PROJECT_COLOR = "#007bff"
MIN_PASSWORD_LENGTH = 8


def _strip_required(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be blank")
    return value.strip()


RequiredText = Annotated[str, AfterValidator(_strip_required)]


class User(BaseModel):
    """User model.

    Credential material never leaves the store, so it has no field here.
    """

    id: str
    email: EmailStr
    name: str
    timezone: str = "UTC"
    created_at: datetime
    updated_at: datetime


class UserCreate(BaseModel):
    """Registration input; the password is hashed before it reaches the store."""

    email: EmailStr
    name: RequiredText
    password: str = Field(min_length=MIN_PASSWORD_LENGTH)


class Project(BaseModel):
    """Project model representing a complete project entity.

    Attributes:
        id: Unique identifier for the project
        name: Project name
        description: Optional longer description
        color: Hex color code used as a display hint
        user_id: Owning user (set at creation, never changed)
        created_at: Creation timestamp
        updated_at: Last update timestamp
    """

    id: str
    name: str
    description: str | None = None
    color: str = DEFAULT_PROJECT_COLOR
    user_id: str
    created_at: datetime
    updated_at: datetime


class ProjectCreate(BaseModel):
    """Model for creating a new project."""

    name: RequiredText
    description: str | None = None
    color: str | None = None


class ProjectUpdate(BaseModel):
    """Model for updating an existing project.

    All fields are optional - only provided fields will be updated.
    """

    model_config = ConfigDict(extra="forbid")

    name: RequiredText | None = None
    description: str | None = None
    color: str | None = None


class Subtask(BaseModel):
    """Checklist item embedded in a task; identified only by its position."""

    title: RequiredText
    completed: bool = False


class ProjectReference(BaseModel):
    """The two ways a task can point at a project.

    ``project_id`` is the authoritative reference. ``legacy_name`` is the
    free-text label written before references existed; it is kept for
    compatibility and is not guaranteed to name the same project.
    """

    model_config = ConfigDict(frozen=True)

    project_id: str | None = None
    legacy_name: str | None = None

    @classmethod
    def of(cls, task: Mapping[str, Any]) -> ProjectReference:
        """Read the reference from a task payload (``project_id`` and ``project``)."""
        return cls(project_id=task.get("project_id"), legacy_name=task.get("project"))

    @property
    def is_set(self) -> bool:
        return self.project_id is not None or self.legacy_name is not None

    @property
    def is_legacy(self) -> bool:
        return self.project_id is None and self.legacy_name is not None

    @property
    def label(self) -> str | None:
        """Short display label. The reference wins over the legacy name."""
        if self.project_id is not None:
            return self.project_id[:8]
        return self.legacy_name


class Task(BaseModel):
    """Task model representing a complete task entity.

    Attributes:
        id: Unique identifier for the task
        title: Short task title
        description: Optional detailed description
        completed: Completion status
        priority: "High", "Medium" or "Low"; rows written by older clients
            may carry no value or an unknown one
        due_date: Optional due date (UTC)
        archived: Whether the task is archived
        subtasks: Embedded checklist
        tags: Free-form tag strings
        project: Legacy free-text project name
        project_id: Reference to an owned project
        user_id: Owning user (set at creation, never changed)
        created_at: Creation timestamp
        updated_at: Last update timestamp
    """

    id: str
    title: str
    description: str | None = None
    completed: bool = False
    priority: str | None = DEFAULT_PRIORITY
    due_date: datetime | None = None
    archived: bool = False
    subtasks: list[Subtask] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    project: str | None = None
    project_id: str | None = None
    user_id: str
    created_at: datetime
    updated_at: datetime


class TaskCreate(BaseModel):
    """Model for creating a new task.

    Attributes:
        title: Task title (required)
        description: Optional detailed description
        priority: Priority level; None stores no priority at all
        due_date: Optional due date
        subtasks: Initial checklist
        tags: Tag strings
        project: Legacy free-text project name
        project_id: Reference to one of the caller's projects
    """

    title: RequiredText
    description: str | None = None
    priority: Priority | None = DEFAULT_PRIORITY
    due_date: datetime | None = None
    subtasks: list[Subtask] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    project: str | None = None
    project_id: str | None = None


_NON_NULLABLE_TASK_FIELDS = ("title", "completed", "archived", "subtasks", "tags")


class TaskUpdate(BaseModel):
    """Model for updating an existing task.

    Only fields that were explicitly provided are written. Passing ``None``
    clears a nullable field (for example ``project_id=None`` detaches the
    task from its project).
    """

    model_config = ConfigDict(extra="forbid")

    title: RequiredText | None = None
    description: str | None = None
    completed: bool | None = None
    priority: Priority | None = None
    due_date: datetime | None = None
    archived: bool | None = None
    subtasks: list[Subtask] | None = None
    tags: list[str] | None = None
    project: str | None = None
    project_id: str | None = None

    @model_validator(mode="after")
    def _reject_null_required(self) -> TaskUpdate:
        for name in _NON_NULLABLE_TASK_FIELDS:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be cleared")
        return self

    def changes(self) -> dict:
        """Return only the explicitly provided fields."""
        return self.model_dump(exclude_unset=True)


class TaskFilters(BaseModel):
    """Declarative parameters of a task listing.

    Attributes:
        status: "active", "completed", "archived" or "overdue"; anything
            else means no status constraint
        project_id: Matches the project reference or the legacy project name
        search: Case-insensitive substring of title or description
        sort: "created", "dueDate", "dueDateDesc", "priority" or
            "alphabetical"
    """

    status: str | None = None
    project_id: str | None = None
    search: str | None = None
    sort: str | None = None
