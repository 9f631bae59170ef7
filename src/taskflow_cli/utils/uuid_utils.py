"""UUID utility functions for Taskflow CLI.

Listings show the first 8 characters of each id; commands accept such a
prefix wherever a task or project id is expected.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from taskflow_cli.models import NotFoundError, ValidationFailure

if TYPE_CHECKING:
    from taskflow_cli.repositories import ProjectRepository, TaskRepository

UUID_RELAXED_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE
)
_PREFIX_PATTERN = re.compile(r"^[0-9a-f\-]+$", re.IGNORECASE)

MIN_PREFIX_LENGTH = 4


def is_full_uuid(value: str) -> bool:
    """Check if string is a full UUID (36 characters)."""
    return len(value) == 36 and UUID_RELAXED_PATTERN.match(value) is not None


def shorten_uuid(uuid: str, length: int = 8) -> str:
    return uuid[:length]


def _pick(entity: str, value: str, ids: list[str]) -> str:
    if not ids:
        raise NotFoundError(entity, value)
    if len(ids) > 1:
        matches = ", ".join(shorten_uuid(i) for i in ids[:5])
        if len(ids) > 5:
            matches += f", ... ({len(ids)} total)"
        raise ValidationFailure(
            f"Ambiguous ID '{value}' matches {len(ids)} {entity.lower()}s: {matches}"
        )
    return ids[0]


async def resolve_task_id(
    value: str,
    repository: TaskRepository,
    owner_id: str,
    min_length: int = MIN_PREFIX_LENGTH,
) -> str:
    """Resolve a full id or id prefix to one of the owner's tasks.

    Raises:
        NotFoundError: If no owned task matches
        ValidationFailure: If the prefix is too short or ambiguous
    """
    normalized = value.strip().lower()
    if is_full_uuid(normalized):
        return normalized

    if len(normalized) < min_length or not _PREFIX_PATTERN.match(normalized):
        raise ValidationFailure(
            f"Task ID must be a UUID or a prefix of at least {min_length} characters: {value}",
            ["task_id"],
        )

    tasks = await repository.find(owner_id)
    return _pick("Task", value, [t.id for t in tasks if t.id.startswith(normalized)])


async def resolve_project_id(
    value: str,
    repository: ProjectRepository,
    owner_id: str,
    min_length: int = MIN_PREFIX_LENGTH,
) -> str:
    """Resolve a full id, id prefix or exact project name (case-insensitive).

    An id prefix wins over a name when both would match.

    Raises:
        NotFoundError: If no owned project matches
        ValidationFailure: If the value is ambiguous
    """
    normalized = value.strip().lower()
    if is_full_uuid(normalized):
        return normalized

    projects = await repository.find(owner_id)
    if len(normalized) >= min_length and _PREFIX_PATTERN.match(normalized):
        by_prefix = [p.id for p in projects if p.id.startswith(normalized)]
        if by_prefix:
            return _pick("Project", value, by_prefix)

    folded = value.strip().casefold()
    return _pick("Project", value, [p.id for p in projects if p.name.casefold() == folded])
