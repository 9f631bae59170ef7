"""
Exit codes for Taskflow CLI.

Semantic exit codes let scripts tell what happened without parsing output.
"""

from taskflow_cli.models import (
    AuthenticationError,
    ConflictError,
    DataAccessError,
    NotFoundError,
    ValidationFailure,
)

# Success
SUCCESS = 0

# General error (unspecified)
ERROR_GENERAL = 1

# Invalid arguments or validation error
ERROR_INVALID_ARGS = 2

# Authentication failure (not logged in, invalid credentials, expired session)
ERROR_AUTH_FAILURE = 3

# Storage error (database unreachable, locked, corrupted)
ERROR_DATA_ACCESS = 4

# Resource not found
ERROR_NOT_FOUND = 5


def get_exit_code_name(code: int) -> str:
    """Get the name of an exit code for display purposes."""
    code_names = {
        SUCCESS: "SUCCESS",
        ERROR_GENERAL: "ERROR_GENERAL",
        ERROR_INVALID_ARGS: "ERROR_INVALID_ARGS",
        ERROR_AUTH_FAILURE: "ERROR_AUTH_FAILURE",
        ERROR_DATA_ACCESS: "ERROR_DATA_ACCESS",
        ERROR_NOT_FOUND: "ERROR_NOT_FOUND",
    }
    return code_names.get(code, f"UNKNOWN({code})")


def get_exit_code_description(code: int) -> str:
    """Get a human-readable description of an exit code."""
    descriptions = {
        SUCCESS: "Command executed successfully",
        ERROR_GENERAL: "A general error occurred",
        ERROR_INVALID_ARGS: "Invalid arguments or validation error",
        ERROR_AUTH_FAILURE: "Authentication failure - please login",
        ERROR_DATA_ACCESS: "Storage error - try again",
        ERROR_NOT_FOUND: "Resource not found",
    }
    return descriptions.get(code, "Unknown error")


_ERROR_CODES = (
    (NotFoundError, ERROR_NOT_FOUND),
    (ValidationFailure, ERROR_INVALID_ARGS),
    (ConflictError, ERROR_INVALID_ARGS),
    (AuthenticationError, ERROR_AUTH_FAILURE),
    (DataAccessError, ERROR_DATA_ACCESS),
)


def exit_code_for(error: Exception) -> int:
    """Map a raised exception to its semantic exit code."""
    for error_type, code in _ERROR_CODES:
        if isinstance(error, error_type):
            return code
    return ERROR_GENERAL
