"""Immutable predicate values over stored documents.

Predicates are small frozen dataclasses combined with ``&`` and ``|``.
Combining never mutates an operand; it returns a new value, so a filter
built in stages can be compared and rendered at every step.

``to_sql()`` renders a predicate as a parameterised SQL fragment for the
SQLite adapter. Case-insensitive matching relies on the ``casefold`` SQL
function registered on every connection.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from taskflow_cli.utils.datetime_utils import to_iso

_FIELD_RE = re.compile(r"^[a-z_][a-z0-9_]*$")


def _check_field(field: str) -> None:
    if not _FIELD_RE.match(field):
        raise ValueError(f"Invalid field name: {field!r}")


def _bind(value: Any) -> Any:
    if isinstance(value, datetime):
        return to_iso(value)
    return value


class Predicate:
    """Base class for all predicates."""

    def to_sql(self) -> tuple[str, list[Any]]:
        raise NotImplementedError

    def __and__(self, other: Predicate) -> Predicate:
        return And.of(self, other)

    def __or__(self, other: Predicate) -> Predicate:
        return Or.of(self, other)


@dataclass(frozen=True)
class MatchAll(Predicate):
    """Neutral element: matches every document."""

    def to_sql(self) -> tuple[str, list[Any]]:
        return "1 = 1", []


@dataclass(frozen=True)
class Eq(Predicate):
    """``field`` equals ``value``; a None value matches missing fields."""

    field: str
    value: Any

    def __post_init__(self) -> None:
        _check_field(self.field)

    def to_sql(self) -> tuple[str, list[Any]]:
        if self.value is None:
            return f"{self.field} IS NULL", []
        return f"{self.field} = ?", [_bind(self.value)]


@dataclass(frozen=True)
class Lt(Predicate):
    """``field`` is strictly less than ``value``; missing fields never match."""

    field: str
    value: Any

    def __post_init__(self) -> None:
        _check_field(self.field)

    def to_sql(self) -> tuple[str, list[Any]]:
        return f"{self.field} < ?", [_bind(self.value)]


@dataclass(frozen=True)
class Contains(Predicate):
    """Case-insensitive literal substring match on a text field."""

    field: str
    text: str

    def __post_init__(self) -> None:
        _check_field(self.field)

    def to_sql(self) -> tuple[str, list[Any]]:
        return f"instr(casefold({self.field}), ?) > 0", [self.text.casefold()]


@dataclass(frozen=True)
class And(Predicate):
    """Conjunction of two or more predicates."""

    parts: tuple[Predicate, ...]

    @classmethod
    def of(cls, *parts: Predicate) -> Predicate:
        flat: list[Predicate] = []
        for part in parts:
            if isinstance(part, MatchAll):
                continue
            if isinstance(part, And):
                flat.extend(part.parts)
            else:
                flat.append(part)
        if not flat:
            return MatchAll()
        if len(flat) == 1:
            return flat[0]
        return cls(tuple(flat))

    def to_sql(self) -> tuple[str, list[Any]]:
        return _join(" AND ", self.parts)


@dataclass(frozen=True)
class Or(Predicate):
    """Disjunction of two or more predicates."""

    parts: tuple[Predicate, ...]

    @classmethod
    def of(cls, *parts: Predicate) -> Predicate:
        flat: list[Predicate] = []
        for part in parts:
            if isinstance(part, MatchAll):
                return part
            if isinstance(part, Or):
                flat.extend(part.parts)
            else:
                flat.append(part)
        if not flat:
            raise ValueError("Or needs at least one predicate")
        if len(flat) == 1:
            return flat[0]
        return cls(tuple(flat))

    def to_sql(self) -> tuple[str, list[Any]]:
        return _join(" OR ", self.parts)


def _join(operator: str, parts: tuple[Predicate, ...]) -> tuple[str, list[Any]]:
    clauses = []
    params: list[Any] = []
    for part in parts:
        clause, part_params = part.to_sql()
        clauses.append(clause)
        params.extend(part_params)
    return "(" + operator.join(clauses) + ")", params
