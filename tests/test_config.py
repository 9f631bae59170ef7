"""Tests for ConfigManager."""

from __future__ import annotations

import json

import pytest

from taskflow_cli.config import ConfigManager, get_config_manager
from taskflow_cli.models import ValidationFailure


@pytest.fixture
def manager():
    return ConfigManager("test")


def test_defaults(manager):
    assert manager.get("query.default_sort") == "created"
    assert manager.get("output.format") == "pretty"
    assert manager.get("auth.session_ttl_hours") == 336
    assert manager.get("log.level") == "INFO"
    assert manager.get("storage.db_path") is None


def test_unknown_key_reads_as_none(manager):
    assert manager.get("nope.nothing") is None


def test_set_saves_to_profile_file(manager):
    manager.set("output.format", "json")

    saved = json.loads(manager.config_file.read_text())
    assert saved["output"]["format"] == "json"
    assert ConfigManager("test").get("output.format") == "json"


def test_set_validates(manager):
    with pytest.raises(ValidationFailure):
        manager.set("query.default_sort", "random")
    with pytest.raises(ValidationFailure):
        manager.set("auth.session_ttl_hours", 0)
    with pytest.raises(ValidationFailure):
        manager.set("storage.unknown", "x")


def test_corrupted_file_falls_back_to_defaults(manager):
    manager.config_file.write_text("{not json")
    assert manager.load_config().output.format == "pretty"


def test_reset(manager):
    manager.set("output.format", "yaml")
    manager.reset()
    assert manager.get("output.format") == "pretty"


def test_db_path_resolution(manager, monkeypatch):
    assert manager.resolve_db_path() is None

    manager.set("storage.db_path", "/tmp/configured.db")
    assert manager.resolve_db_path() == "/tmp/configured.db"

    monkeypatch.setenv("TASKFLOW_DB", "/tmp/env.db")
    assert manager.resolve_db_path() == "/tmp/env.db"


def test_credentials(manager):
    assert manager.load_credentials() is None

    manager.save_credentials("tok", "ada@example.com")

    assert manager.load_credentials() == {"token": "tok", "email": "ada@example.com"}
    assert manager.credentials_file.stat().st_mode & 0o777 == 0o600

    manager.clear_credentials()
    assert manager.load_credentials() is None


def test_global_manager_per_profile():
    default = get_config_manager()
    assert get_config_manager() is default
    assert get_config_manager("work").profile == "work"
