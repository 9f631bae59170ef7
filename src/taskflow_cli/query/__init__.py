"""Task query building: ownership scoping, filter compilation and sorting."""

from .filters import TASK_STATUSES, compile_task_filters
from .ownership import by_id, owned_by, scoped
from .predicates import And, Contains, Eq, Lt, MatchAll, Or, Predicate
from .sorting import (
    DEFAULT_SORT,
    PRIORITY_RANK,
    SORT_KEYS,
    OrderBy,
    SortPlan,
    priority_rank,
    resolve_sort,
)

__all__ = [
    "Predicate",
    "MatchAll",
    "Eq",
    "Lt",
    "Contains",
    "And",
    "Or",
    "owned_by",
    "scoped",
    "by_id",
    "compile_task_filters",
    "TASK_STATUSES",
    "resolve_sort",
    "SortPlan",
    "OrderBy",
    "priority_rank",
    "PRIORITY_RANK",
    "SORT_KEYS",
    "DEFAULT_SORT",
]
