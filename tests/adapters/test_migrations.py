"""Tests for the migration runner."""

from __future__ import annotations

import sqlite3

import pytest

from taskflow_cli.adapters.sqlite.migrations.m001_initial_schema import initial_migration
from taskflow_cli.adapters.sqlite.migrations.runner import Migration, MigrationRunner


class _AddNotes(Migration):
    version = 2
    description = "Add notes table"

    def up(self, connection):
        connection.execute("CREATE TABLE notes (id TEXT PRIMARY KEY)")


class _Broken(Migration):
    version = 2
    description = "Half done"

    def up(self, connection):
        connection.execute("CREATE TABLE half (id TEXT)")
        raise sqlite3.OperationalError("no space left")


@pytest.fixture
def raw_connection():
    conn = sqlite3.connect(":memory:", isolation_level=None)
    yield conn
    conn.close()


@pytest.fixture
def runner(raw_connection):
    return MigrationRunner(raw_connection)


def test_fresh_database_is_version_zero(runner):
    assert runner.get_current_version() == 0


def test_runs_pending_in_order(runner):
    applied = runner.run_migrations([_AddNotes(), initial_migration])

    assert applied == 2
    assert runner.get_current_version() == 2
    history = runner.get_migration_history()
    assert [h["version"] for h in history] == [1, 2]
    assert history[0]["description"] == "Initial database schema"


def test_rerun_is_a_no_op(runner):
    runner.run_migrations([initial_migration])
    assert runner.run_migrations([initial_migration]) == 0


def test_old_version_rejected(runner):
    runner.run_migration(initial_migration)

    with pytest.raises(ValueError):
        runner.run_migration(initial_migration)


def test_failed_migration_leaves_nothing_behind(runner, raw_connection):
    runner.run_migrations([initial_migration])

    with pytest.raises(RuntimeError, match="Migration 2 failed"):
        runner.run_migrations([initial_migration, _Broken()])

    assert runner.get_current_version() == 1
    tables = {
        row[0]
        for row in raw_connection.execute("SELECT name FROM sqlite_master WHERE type = 'table'")
    }
    assert "half" not in tables
