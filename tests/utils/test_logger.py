"""Tests for the application logger utility."""

from __future__ import annotations

import logging
import os
from unittest.mock import patch

import pytest


def _reset_app_loggers() -> None:
    app_logger = logging.getLogger("taskflow_cli")
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
        handler.close()
    app_logger.setLevel(logging.NOTSET)
    for name in list(logging.Logger.manager.loggerDict):
        if name.startswith("taskflow_cli."):
            child = logging.getLogger(name)
            child.disabled = False
            child.setLevel(logging.NOTSET)


@pytest.fixture(autouse=True)
def reset_logger(monkeypatch):
    """Reset the logger singleton and logging state between tests."""
    import taskflow_cli.utils.logger as logger_mod

    monkeypatch.delenv("TASKFLOW_LOG_LEVEL", raising=False)
    logger_mod._logger = None
    _reset_app_loggers()
    yield
    logger_mod._logger = None
    _reset_app_loggers()


def _read_log(logger: logging.Logger) -> str:
    (handler,) = logger.handlers
    handler.flush()
    with open(handler.baseFilename, encoding="utf-8") as f:
        return f.read()


def test_get_logger_creates_log_file(tmp_path):
    """Logger creates the log file inside user_log_dir."""
    with patch("taskflow_cli.utils.logger.user_log_dir", return_value=str(tmp_path)):
        from taskflow_cli.utils.logger import get_logger

        logger = get_logger()

    assert (tmp_path / "taskflow.log").exists()
    assert logger.name == "taskflow_cli"
    assert logger.propagate is False


def test_get_logger_returns_singleton(tmp_path):
    with patch("taskflow_cli.utils.logger.user_log_dir", return_value=str(tmp_path)):
        from taskflow_cli.utils.logger import get_logger

        assert get_logger() is get_logger()


def test_component_loggers_write_to_the_same_file(tmp_path):
    """Service modules log through components such as "taskflow_cli.services"."""
    with patch("taskflow_cli.utils.logger.user_log_dir", return_value=str(tmp_path)):
        from taskflow_cli.utils.logger import get_logger

        component = get_logger("services")
        component.info("created task abc")
        logger = get_logger()

    assert component.name == "taskflow_cli.services"
    assert _read_log(logger).rstrip().endswith("[taskflow_cli.services] created task abc")


def test_records_carry_process_id(tmp_path):
    with patch("taskflow_cli.utils.logger.user_log_dir", return_value=str(tmp_path)):
        from taskflow_cli.utils.logger import get_logger

        get_logger().warning("disk full")

    assert f" {os.getpid()} WARNING " in _read_log(get_logger())


def test_reinitialising_replaces_stale_handlers(tmp_path):
    """A handler left behind by an earlier run is closed, never shared."""
    import taskflow_cli.utils.logger as logger_mod

    stale = logging.FileHandler(tmp_path / "stale.log")
    logging.getLogger("taskflow_cli").addHandler(stale)

    with patch("taskflow_cli.utils.logger.user_log_dir", return_value=str(tmp_path / "logs")):
        logger = logger_mod.get_logger()
        logger.info("fresh")

    assert stale not in logger.handlers
    assert len(logger.handlers) == 1
    assert "fresh" in _read_log(logger)
    assert logger_mod.log_file_path() == tmp_path / "logs" / "taskflow.log"


def test_set_level(tmp_path):
    with patch("taskflow_cli.utils.logger.user_log_dir", return_value=str(tmp_path)):
        from taskflow_cli.utils.logger import get_logger, set_level

        set_level("warning")
        assert get_logger().level == logging.WARNING

        set_level("nonsense")
        assert get_logger().level == logging.INFO


def test_environment_overrides_configured_level(tmp_path, monkeypatch):
    monkeypatch.setenv("TASKFLOW_LOG_LEVEL", "debug")
    with patch("taskflow_cli.utils.logger.user_log_dir", return_value=str(tmp_path)):
        from taskflow_cli.utils.logger import get_logger, set_level

        set_level("ERROR")

    assert get_logger().level == logging.DEBUG
