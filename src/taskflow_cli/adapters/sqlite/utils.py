"""Utility functions for SQLite adapter."""

from __future__ import annotations

import json
import sqlite3
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from typing import Any

from pydantic import BaseModel

from taskflow_cli.models import DataAccessError
from taskflow_cli.utils.datetime_utils import to_iso, utc_now


def generate_uuid() -> str:
    """Generate a new UUID as string.

    Returns:
        UUID string (e.g., "123e4567-e89b-12d3-a456-426614174000")
    """
    return str(uuid.uuid4())


def now_iso() -> str:
    """Get current timestamp in the stored ISO format."""
    return to_iso(utc_now())


def row_to_dict(row: Any) -> dict[str, Any]:
    """Convert sqlite3.Row to dictionary.

    Args:
        row: sqlite3.Row object

    Returns:
        Dictionary with column names as keys
    """
    if row is None:
        return {}
    return dict(row)


def to_db_value(value: Any) -> Any:
    """Convert a model value into something sqlite3 can bind.

    Datetimes become UTC ISO strings, booleans integers, and lists (tags,
    subtasks) JSON arrays.
    """
    if isinstance(value, datetime):
        return to_iso(value)
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, list):
        return json.dumps(
            [item.model_dump() if isinstance(item, BaseModel) else item for item in value]
        )
    return value


def build_update_clause(updates: dict[str, Any]) -> tuple[str, list[Any]]:
    """Build SQL UPDATE SET clause from updates dictionary.

    Unlike a WHERE clause, None values are kept: they clear the column.

    Args:
        updates: Dictionary of column names to new values

    Returns:
        Tuple of (SET clause string, parameters list)
    """
    set_parts = []
    params = []

    for key, value in updates.items():
        set_parts.append(f"{key} = ?")
        params.append(to_db_value(value))

    return ", ".join(set_parts), params


@contextmanager
def translate_errors() -> Iterator[None]:
    """Re-raise sqlite3 failures as DataAccessError."""
    try:
        yield
    except sqlite3.Error as e:
        raise DataAccessError(f"Database error: {e}") from e


@contextmanager
def transaction(connection: sqlite3.Connection) -> Iterator[sqlite3.Connection]:
    """Run the enclosed statements as one transaction.

    The connection is expected in autocommit mode (``isolation_level=None``).
    Nested use joins the outer transaction.
    """
    if connection.in_transaction:
        yield connection
        return

    connection.execute("BEGIN IMMEDIATE")
    try:
        yield connection
    except BaseException:
        connection.execute("ROLLBACK")
        raise
    else:
        connection.execute("COMMIT")
