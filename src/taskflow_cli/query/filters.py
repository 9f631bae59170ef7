"""Compile declarative task filters into a single predicate.

Each stage produces its own predicate and the stages are AND-ed together.
The project and search stages are disjunctions; they are kept as separate
OR groups so a task must satisfy both of them, never either one.
"""

from __future__ import annotations

from datetime import datetime

from taskflow_cli.models import TaskFilters
from taskflow_cli.query.predicates import And, Contains, Eq, Lt, MatchAll, Or, Predicate
from taskflow_cli.utils.datetime_utils import utc_now
from taskflow_cli.utils.logger import get_logger

STATUS_ACTIVE = "active"
STATUS_COMPLETED = "completed"
STATUS_ARCHIVED = "archived"
STATUS_OVERDUE = "overdue"

TASK_STATUSES = (STATUS_ACTIVE, STATUS_COMPLETED, STATUS_ARCHIVED, STATUS_OVERDUE)

_OPEN = And.of(Eq("completed", False), Eq("archived", False))


def status_predicate(status: str | None, now: datetime | None = None) -> Predicate:
    """Map a status token to its conjunction of conditions.

    An absent or unrecognized token adds no constraint.
    """
    if status == STATUS_ACTIVE:
        return _OPEN
    if status == STATUS_COMPLETED:
        return And.of(Eq("completed", True), Eq("archived", False))
    if status == STATUS_ARCHIVED:
        return Eq("archived", True)
    if status == STATUS_OVERDUE:
        return _OPEN & Lt("due_date", now or utc_now())
    if status:
        get_logger("query").debug(
            "ignoring unrecognized status filter: %r", status
        )
    return MatchAll()


def project_predicate(project_token: str | None) -> Predicate:
    """Match the project reference or, for older tasks, the legacy name."""
    if not project_token:
        return MatchAll()
    return Or.of(Eq("project_id", project_token), Eq("project", project_token))


def search_predicate(text: str | None) -> Predicate:
    """Case-insensitive substring of title or description.

    Blank or whitespace-only text means no search at all.
    """
    if text is None or not text.strip():
        return MatchAll()
    return Or.of(Contains("title", text), Contains("description", text))


def compile_task_filters(filters: TaskFilters, now: datetime | None = None) -> Predicate:
    """Build the combined predicate for a task listing.

    Args:
        filters: Status, project and search parameters
        now: Reference time for the overdue check (defaults to current UTC)

    Returns:
        One predicate; ownership is added by the repository
    """
    return And.of(
        status_predicate(filters.status, now),
        project_predicate(filters.project_id),
        search_predicate(filters.search),
    )
