"""Database connection management for the Taskflow SQLite store.

This module provides a singleton connection manager for the local SQLite database,
ensuring proper connection lifecycle, WAL mode, and foreign key enforcement.
"""

from __future__ import annotations

import atexit
import os
import sqlite3
from pathlib import Path

from platformdirs import user_data_dir

from taskflow_cli.adapters.sqlite.migrations.m001_initial_schema import initial_migration
from taskflow_cli.adapters.sqlite.migrations.runner import MigrationRunner
from taskflow_cli.adapters.sqlite.utils import translate_errors
from taskflow_cli.models import DataAccessError
from taskflow_cli.utils.logger import get_logger

DEFAULT_DB_NAME = "taskflow.db"


def default_db_path() -> Path:
    return Path(user_data_dir("taskflow-cli")) / DEFAULT_DB_NAME


def _casefold(value: str | None) -> str | None:
    if value is None:
        return None
    return str(value).casefold()


class DatabaseConnection:
    """Singleton connection manager for the local SQLite store.

    Provides:
    - Single connection per process (connection reuse)
    - Autocommit mode; multi-statement writes use ``utils.transaction``
    - WAL mode for better concurrency
    - Foreign key constraint enforcement
    - A ``casefold`` SQL function for case-insensitive search
    - Proper file permissions (owner read/write only)
    """

    _instance: DatabaseConnection | None = None
    _connection: sqlite3.Connection | None = None
    _db_path: Path | None = None
    _exit_hook_registered = False

    def __new__(cls) -> DatabaseConnection:
        """Ensure singleton pattern."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @classmethod
    def get_connection(cls, db_path: str | Path | None = None) -> sqlite3.Connection:
        """Get or create database connection.

        Args:
            db_path: Path to database file. If None, uses default location.

        Returns:
            sqlite3.Connection object configured for Taskflow usage

        Raises:
            DataAccessError: If the database cannot be opened or migrated
        """
        instance = cls()
        db_path = Path(db_path) if db_path is not None else default_db_path()

        # If connection exists and path hasn't changed, return it
        if instance._connection is not None and instance._db_path == db_path:
            return instance._connection

        # Close existing connection if path changed
        if instance._connection is not None:
            cls.close_connection()

        db_path.parent.mkdir(parents=True, exist_ok=True)
        is_new_database = not db_path.exists()

        with translate_errors():
            connection = sqlite3.connect(
                str(db_path),
                check_same_thread=False,
                timeout=30.0,
                isolation_level=None,
            )
            connection.row_factory = sqlite3.Row
            connection.create_function("casefold", 1, _casefold, deterministic=True)
            connection.execute("PRAGMA foreign_keys = ON")
            connection.execute("PRAGMA journal_mode = WAL")

        if is_new_database:
            os.chmod(db_path, 0o600)
            get_logger().info("Created database at %s", db_path)

        try:
            cls._run_migrations(connection)
        except DataAccessError:
            connection.close()
            raise

        instance._connection = connection
        instance._db_path = db_path

        if not cls._exit_hook_registered:
            atexit.register(cls.close_connection)
            cls._exit_hook_registered = True

        return connection

    @classmethod
    def _run_migrations(cls, connection: sqlite3.Connection) -> None:
        migrations = [
            initial_migration,
        ]

        try:
            with translate_errors():
                runner = MigrationRunner(connection)
                applied = runner.run_migrations(migrations)
        except RuntimeError as e:
            raise DataAccessError(str(e)) from e
        if applied:
            get_logger().debug("Schema at version %d", runner.get_current_version())

    @classmethod
    def close_connection(cls) -> None:
        """Close database connection gracefully."""
        instance = cls()
        if instance._connection is not None:
            try:
                instance._connection.close()
            except sqlite3.Error as e:
                get_logger().warning("Error while closing database: %s", e)
            finally:
                instance._connection = None
                instance._db_path = None

    @classmethod
    def get_db_path(cls) -> Path | None:
        """Get current database path."""
        instance = cls()
        return instance._db_path


def get_connection(db_path: str | Path | None = None) -> sqlite3.Connection:
    """Helper function to get database connection.

    Args:
        db_path: Optional path to database file

    Returns:
        Configured sqlite3.Connection
    """
    return DatabaseConnection.get_connection(db_path)


def close_connection() -> None:
    DatabaseConnection.close_connection()
