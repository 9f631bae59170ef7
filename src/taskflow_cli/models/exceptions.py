"""Exceptions raised by the Taskflow services and repositories."""

from __future__ import annotations


class TaskflowError(Exception):
    """Base exception for all Taskflow errors."""


class NotFoundError(TaskflowError):
    """Raised when an entity does not exist or belongs to another user.

    Both cases produce the same message so callers cannot discover
    records owned by someone else.
    """

    def __init__(self, entity: str, entity_id: str):
        super().__init__(f"{entity} not found: {entity_id}")
        self.entity = entity
        self.entity_id = entity_id


class ValidationFailure(TaskflowError):
    """Raised when a required field is missing or malformed."""

    def __init__(self, message: str, fields: list[str] | None = None):
        super().__init__(message)
        self.fields = fields or []

    @classmethod
    def from_pydantic(cls, error) -> ValidationFailure:
        """Build from a pydantic ValidationError, keeping the field paths."""
        fields = []
        details = []
        for item in error.errors():
            field = ".".join(str(part) for part in item["loc"]) or "(root)"
            fields.append(field)
            details.append(f"{field}: {item['msg']}")
        return cls("Invalid input - " + "; ".join(details), fields)


class DataAccessError(TaskflowError):
    """Raised when the store is unreachable or fails unexpectedly."""


class AuthenticationError(TaskflowError):
    """Raised when credentials or a session token cannot be resolved."""


class ConflictError(TaskflowError):
    """Raised when a write collides with an existing unique record."""
