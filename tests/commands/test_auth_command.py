"""Tests for the auth commands against a temporary database."""
# pylint: disable=redefined-outer-name

from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

from taskflow_cli.adapters.sqlite import close_connection
from taskflow_cli.commands.auth import app
from taskflow_cli.config import get_config_manager

runner = CliRunner()

REGISTER = ["register", "--email", "ada@example.com", "--name", "Ada", "--password", "long-enough"]


@pytest.fixture
def temp_db(tmp_path, monkeypatch):
    monkeypatch.setenv("TASKFLOW_DB", str(tmp_path / "auth.db"))
    yield
    close_connection()


def test_register_and_login_saves_token(temp_db):
    assert runner.invoke(app, REGISTER).exit_code == 0

    result = runner.invoke(
        app, ["login", "--email", "ada@example.com", "--password", "long-enough"]
    )

    assert result.exit_code == 0, result.output
    credentials = get_config_manager().load_credentials()
    assert credentials["email"] == "ada@example.com"
    assert credentials["token"]


def test_register_twice_conflicts(temp_db):
    runner.invoke(app, REGISTER)
    result = runner.invoke(app, REGISTER)

    assert result.exit_code == 2
    assert "already registered" in result.output


def test_register_short_password(temp_db):
    result = runner.invoke(
        app, ["register", "--email", "a@example.com", "--name", "A", "--password", "short"]
    )
    assert result.exit_code == 2


def test_login_wrong_password(temp_db):
    runner.invoke(app, REGISTER)

    result = runner.invoke(app, ["login", "--email", "ada@example.com", "--password", "nope-nope"])

    assert result.exit_code == 3
    assert get_config_manager().load_credentials() is None


def test_whoami_and_logout(temp_db):
    runner.invoke(app, REGISTER)
    runner.invoke(app, ["login", "--email", "ada@example.com", "--password", "long-enough"])

    result = runner.invoke(app, ["whoami", "-o", "json"])
    assert result.exit_code == 0, result.output
    assert json.loads(result.output)["email"] == "ada@example.com"

    result = runner.invoke(app, ["logout"])
    assert result.exit_code == 0
    assert get_config_manager().load_credentials() is None


def test_logout_when_not_logged_in(temp_db):
    result = runner.invoke(app, ["logout"])

    assert result.exit_code == 0
    assert "Not logged in" in result.output
