"""Tests for the config commands."""

from __future__ import annotations

from typer.testing import CliRunner

from taskflow_cli.commands.config import app, parse_value
from taskflow_cli.config import get_config_manager

runner = CliRunner()


def test_parse_value():
    assert parse_value("true") is True
    assert parse_value("False") is False
    assert parse_value("null") is None
    assert parse_value("48") == 48
    assert parse_value("json") == "json"


def test_show_yaml():
    result = runner.invoke(app, ["show"])

    assert result.exit_code == 0
    assert "default_sort: created" in result.output


def test_get_value():
    result = runner.invoke(app, ["get", "output.format"])

    assert result.exit_code == 0
    assert "pretty" in result.output


def test_get_unset_key_is_not_found():
    result = runner.invoke(app, ["get", "storage.db_path"])
    assert result.exit_code == 5


def test_set_persists():
    result = runner.invoke(app, ["set", "query.default_sort", "priority"])

    assert result.exit_code == 0, result.output
    get_config_manager()._config = None
    assert get_config_manager().get("query.default_sort") == "priority"


def test_set_rejects_invalid_value():
    result = runner.invoke(app, ["set", "output.format", "xml"])
    assert result.exit_code == 2


def test_set_rejects_unknown_key():
    result = runner.invoke(app, ["set", "output.colour", "red"])
    assert result.exit_code == 2


def test_reset_single_key():
    runner.invoke(app, ["set", "auth.session_ttl_hours", "1"])

    result = runner.invoke(app, ["reset", "auth.session_ttl_hours", "--yes"])

    assert result.exit_code == 0
    assert get_config_manager().get("auth.session_ttl_hours") == 336


def test_paths_lists_log_file():
    result = runner.invoke(app, ["paths"])

    assert result.exit_code == 0, result.output
    output = " ".join(result.output.split())
    assert "default.json" in output
    assert "taskflow.log" in output
