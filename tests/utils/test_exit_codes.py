"""Unit tests for taskflow_cli.utils.exit_codes."""

from __future__ import annotations

import pytest

from taskflow_cli.models import (
    AuthenticationError,
    ConflictError,
    DataAccessError,
    NotFoundError,
    TaskflowError,
    ValidationFailure,
)
from taskflow_cli.utils.exit_codes import (
    ERROR_AUTH_FAILURE,
    ERROR_DATA_ACCESS,
    ERROR_GENERAL,
    ERROR_INVALID_ARGS,
    ERROR_NOT_FOUND,
    SUCCESS,
    exit_code_for,
    get_exit_code_description,
    get_exit_code_name,
)


def test_constant_values():
    assert (SUCCESS, ERROR_GENERAL, ERROR_INVALID_ARGS) == (0, 1, 2)
    assert (ERROR_AUTH_FAILURE, ERROR_DATA_ACCESS, ERROR_NOT_FOUND) == (3, 4, 5)


@pytest.mark.parametrize(
    ("error", "code"),
    [
        (NotFoundError("Task", "x"), ERROR_NOT_FOUND),
        (ValidationFailure("bad"), ERROR_INVALID_ARGS),
        (ConflictError("dup"), ERROR_INVALID_ARGS),
        (AuthenticationError("nope"), ERROR_AUTH_FAILURE),
        (DataAccessError("io"), ERROR_DATA_ACCESS),
        (TaskflowError("other"), ERROR_GENERAL),
        (KeyError("k"), ERROR_GENERAL),
    ],
)
def test_exit_code_for(error, code):
    assert exit_code_for(error) == code


def test_names_and_descriptions():
    assert get_exit_code_name(ERROR_NOT_FOUND) == "ERROR_NOT_FOUND"
    assert get_exit_code_name(42) == "UNKNOWN(42)"
    assert get_exit_code_description(ERROR_DATA_ACCESS).startswith("Storage error")
    assert get_exit_code_description(42) == "Unknown error"
