"""Migration framework for SQLite database schema evolution.

Migrations are sequential and forward-only. Each one runs inside its own
transaction together with the row that records it, so a failed migration
leaves neither schema changes nor a version entry behind.
"""

from __future__ import annotations

import sqlite3
from abc import ABC, abstractmethod

from taskflow_cli.adapters.sqlite.utils import now_iso, transaction
from taskflow_cli.utils.logger import get_logger


class Migration(ABC):
    """Base class for database migrations."""

    @property
    @abstractmethod
    def version(self) -> int:
        """Migration version number (sequential)."""

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable description of the migration."""

    @abstractmethod
    def up(self, connection: sqlite3.Connection) -> None:
        """Execute forward migration.

        Args:
            connection: Database connection, already inside a transaction
        """


class MigrationRunner:
    """Manages and executes database migrations."""

    def __init__(self, connection: sqlite3.Connection):
        self.connection = connection
        self._ensure_version_table()

    def _ensure_version_table(self) -> None:
        """Create schema_version table if it doesn't exist."""
        with transaction(self.connection):
            self.connection.execute("""
                CREATE TABLE IF NOT EXISTS schema_version (
                    version INTEGER PRIMARY KEY,
                    description TEXT NOT NULL,
                    applied_at DATETIME NOT NULL
                )
            """)

    def get_current_version(self) -> int:
        """Get current database schema version.

        Returns:
            Current version number (0 if no migrations applied)
        """
        cursor = self.connection.execute("SELECT MAX(version) FROM schema_version")
        result = cursor.fetchone()[0]
        return result if result is not None else 0

    def run_migration(self, migration: Migration) -> None:
        """Run a single migration.

        Args:
            migration: Migration to execute

        Raises:
            ValueError: If migration version is not greater than current version
            RuntimeError: If the migration itself fails
        """
        current_version = self.get_current_version()

        if migration.version <= current_version:
            raise ValueError(
                f"Migration version {migration.version} is not greater than "
                f"current version {current_version}"
            )

        try:
            with transaction(self.connection):
                migration.up(self.connection)
                self.connection.execute(
                    """
                    INSERT INTO schema_version (version, description, applied_at)
                    VALUES (?, ?, ?)
                    """,
                    (migration.version, migration.description, now_iso()),
                )
        except Exception as e:
            raise RuntimeError(f"Migration {migration.version} failed: {str(e)}") from e

        get_logger().info(
            "Applied migration %d: %s", migration.version, migration.description
        )

    def run_migrations(self, migrations: list[Migration]) -> int:
        """Run all pending migrations.

        Returns:
            Number of migrations applied
        """
        current_version = self.get_current_version()
        pending = [
            m for m in sorted(migrations, key=lambda m: m.version)
            if m.version > current_version
        ]

        for migration in pending:
            self.run_migration(migration)

        return len(pending)

    def get_migration_history(self) -> list[dict]:
        """Get history of applied migrations.

        Returns:
            List of migration records with version, description, and applied_at
        """
        cursor = self.connection.execute("""
            SELECT version, description, applied_at
            FROM schema_version
            ORDER BY version
            """)

        return [
            {"version": row[0], "description": row[1], "applied_at": row[2]}
            for row in cursor.fetchall()
        ]
