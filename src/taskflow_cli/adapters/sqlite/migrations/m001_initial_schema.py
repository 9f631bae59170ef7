"""Initial database schema migration.

Creates users, sessions, projects and tasks with their indexes. The
schema_version table itself is owned by the migration runner.
"""

import sqlite3

from taskflow_cli.adapters.sqlite import schema

from .runner import Migration


class InitialSchemaMigration(Migration):
    """Migration 001: Create initial database schema."""

    @property
    def version(self) -> int:
        return 1

    @property
    def description(self) -> str:
        return "Initial database schema"

    def up(self, connection: sqlite3.Connection) -> None:
        """Create all initial tables."""
        for table_sql in schema.ALL_TABLES:
            connection.execute(table_sql)

        for index_sql in schema.ALL_INDEXES:
            connection.execute(index_sql)


initial_migration = InitialSchemaMigration()
