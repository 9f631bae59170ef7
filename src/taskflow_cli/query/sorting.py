"""Resolve a sort key into a store ordering and an optional in-memory pass.

Most keys map onto a column the store can order by. Priority cannot: its
values do not sort lexically in order of importance, so rows are fetched
in creation order and then stably re-sorted by a fixed rank table.

SQLite places NULLs first in ascending order and last in descending
order, so tasks without a due date lead a ``dueDate`` listing and trail a
``dueDateDesc`` listing. Titles compare with the BINARY collation, i.e.
case-sensitively with uppercase letters before lowercase ones.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass

from taskflow_cli.models import Task

SORT_CREATED = "created"
SORT_DUE_DATE = "dueDate"
SORT_DUE_DATE_DESC = "dueDateDesc"
SORT_PRIORITY = "priority"
SORT_ALPHABETICAL = "alphabetical"

SORT_KEYS = (
    SORT_CREATED,
    SORT_DUE_DATE,
    SORT_DUE_DATE_DESC,
    SORT_PRIORITY,
    SORT_ALPHABETICAL,
)
DEFAULT_SORT = SORT_CREATED

PRIORITY_RANK = {"High": 1, "Medium": 2, "Low": 3}
UNRANKED = 99


@dataclass(frozen=True)
class OrderBy:
    """One ordering term understood by the store."""

    field: str
    descending: bool = False

    def to_sql(self) -> str:
        return f"{self.field} {'DESC' if self.descending else 'ASC'}"


@dataclass(frozen=True)
class SortPlan:
    """Store ordering plus an optional stable in-memory sort key."""

    order_by: tuple[OrderBy, ...]
    key: Callable[[Task], int] | None = None

    def apply(self, tasks: Iterable[Task]) -> list[Task]:
        if self.key is None:
            return list(tasks)
        return sorted(tasks, key=self.key)


def priority_rank(task: Task) -> int:
    """Rank used for priority ordering; unset or unknown values go last."""
    return PRIORITY_RANK.get(task.priority or "", UNRANKED)


def _column(field: str, descending: bool = False) -> tuple[OrderBy, ...]:
    # rowid keeps ties in a fixed order between executions
    return (OrderBy(field, descending), OrderBy("rowid", descending))


_PLANS = {
    SORT_CREATED: SortPlan(_column("created_at", descending=True)),
    SORT_DUE_DATE: SortPlan(_column("due_date")),
    SORT_DUE_DATE_DESC: SortPlan(_column("due_date", descending=True)),
    SORT_ALPHABETICAL: SortPlan(_column("title")),
    SORT_PRIORITY: SortPlan(_column("created_at", descending=True), key=priority_rank),
}


def resolve_sort(sort_key: str | None) -> SortPlan:
    """Return the plan for ``sort_key``; absent or unknown keys mean ``created``."""
    return _PLANS.get(sort_key or DEFAULT_SORT, _PLANS[DEFAULT_SORT])
