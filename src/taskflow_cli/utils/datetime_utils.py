"""Datetime helpers shared by the query layer and the SQLite adapter.

All timestamps are normalised to UTC and serialised with a fixed
microsecond precision, so the stored strings sort lexically in the same
order as the instants they represent.
"""

from __future__ import annotations

from datetime import UTC, datetime


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(UTC)


def to_utc(value: datetime) -> datetime:
    """Convert a datetime to aware UTC; naive values are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def to_iso(value: datetime | None) -> str | None:
    """Serialise a datetime for storage, or pass None through."""
    if value is None:
        return None
    return to_utc(value).isoformat(timespec="microseconds")


def parse_datetime(value: str | datetime | None) -> datetime | None:
    """Parse datetime from various formats.

    Args:
        value: ISO string (a trailing ``Z`` is accepted), datetime or None

    Returns:
        Aware UTC datetime or None
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return to_utc(value)
    return to_utc(datetime.fromisoformat(value.replace("Z", "+00:00")))
