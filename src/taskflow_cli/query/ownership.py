"""Ownership scoping for every project and task access."""

from __future__ import annotations

from taskflow_cli.query.predicates import Eq, MatchAll, Predicate

OWNER_FIELD = "user_id"


def owned_by(owner_id: str) -> Predicate:
    """Predicate matching documents owned by ``owner_id``."""
    if not owner_id:
        raise ValueError("An owner identity is required")
    return Eq(OWNER_FIELD, owner_id)


def scoped(owner_id: str, predicate: Predicate | None = None) -> Predicate:
    """AND the ownership constraint onto ``predicate``.

    A document that matches ``predicate`` but belongs to another owner is
    excluded, which callers observe as "not found".
    """
    return owned_by(owner_id) & (predicate or MatchAll())


def by_id(entity_id: str) -> Predicate:
    return Eq("id", entity_id)
