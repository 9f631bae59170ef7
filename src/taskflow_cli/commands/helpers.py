"""Shared option handling for command modules."""

from __future__ import annotations

from taskflow_cli.config import get_config_manager
from taskflow_cli.models import ValidationFailure

DUE_DATE_FORMATS = ["%Y-%m-%d", "%Y-%m-%dT%H:%M", "%Y-%m-%d %H:%M"]

_NO_PRIORITY = "none"


def output_format(output: str | None) -> str:
    """Explicit --output value, else the configured default."""
    return output or get_config_manager().get("output.format") or "pretty"


def default_sort(sort: str | None) -> str:
    return sort or get_config_manager().get("query.default_sort") or "created"


def parse_priority(value: str) -> str | None:
    """Accept High/Medium/Low in any case; "none" means no priority."""
    if value.lower() == _NO_PRIORITY:
        return None
    normalized = value.capitalize()
    if normalized not in ("High", "Medium", "Low"):
        raise ValidationFailure(
            f"Invalid priority '{value}': use High, Medium, Low or none", ["priority"]
        )
    return normalized
