"""Shared plumbing for the owner-scoped SQLite repositories."""

from __future__ import annotations

import sqlite3
from collections.abc import Sequence
from contextlib import AbstractContextManager
from typing import Any

from taskflow_cli.adapters.sqlite.connection import get_connection
from taskflow_cli.adapters.sqlite.utils import (
    build_update_clause,
    now_iso,
    transaction,
    translate_errors,
)
from taskflow_cli.query import OrderBy, Predicate, scoped


class SqliteRepository:
    """Owner-scoped select/update/delete over one table.

    Every statement is built from ``scoped(owner_id, predicate)``, so the
    ownership condition is part of the WHERE clause of every read and
    write issued through this class.
    """

    table: str = ""
    writable_columns: frozenset[str] = frozenset()

    def __init__(self, db_path: str | None = None):
        """Initialize the repository.

        Args:
            db_path: Optional database file path. If None, uses default location.
        """
        self.db_path = db_path
        self._connection: sqlite3.Connection | None = None

    @property
    def connection(self) -> sqlite3.Connection:
        """Get or create database connection."""
        if self._connection is None:
            self._connection = get_connection(self.db_path)
        return self._connection

    def transaction(self) -> AbstractContextManager:
        return transaction(self.connection)

    def _select(
        self,
        owner_id: str,
        predicate: Predicate | None,
        order_by: Sequence[OrderBy] = (),
        limit: int | None = None,
    ) -> list[sqlite3.Row]:
        clause, params = scoped(owner_id, predicate).to_sql()
        query = f"SELECT * FROM {self.table} WHERE {clause}"
        if order_by:
            query += " ORDER BY " + ", ".join(term.to_sql() for term in order_by)
        if limit is not None:
            query += " LIMIT ?"
            params.append(limit)

        with translate_errors():
            return self.connection.execute(query, params).fetchall()

    def _update(
        self, owner_id: str, predicate: Predicate, changes: dict[str, Any]
    ) -> int:
        unknown = set(changes) - self.writable_columns
        if unknown:
            raise ValueError(
                f"Cannot update {self.table} column(s): {', '.join(sorted(unknown))}"
            )

        # updated_at is always refreshed, even for an empty change set
        set_clause, set_params = build_update_clause({**changes, "updated_at": now_iso()})
        clause, params = scoped(owner_id, predicate).to_sql()

        with translate_errors():
            cursor = self.connection.execute(
                f"UPDATE {self.table} SET {set_clause} WHERE {clause}",
                set_params + params,
            )
        return cursor.rowcount

    def _delete(self, owner_id: str, predicate: Predicate) -> int:
        clause, params = scoped(owner_id, predicate).to_sql()
        with translate_errors():
            cursor = self.connection.execute(
                f"DELETE FROM {self.table} WHERE {clause}", params
            )
        return cursor.rowcount
