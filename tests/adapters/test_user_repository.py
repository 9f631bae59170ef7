"""Tests for SqliteUserRepository."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from unittest.mock import patch

import pytest

from taskflow_cli.adapters.sqlite import get_system_timezone
from taskflow_cli.models import ConflictError

NOW = datetime(2024, 6, 15, 12, 0, tzinfo=UTC)


async def _create(user_repo, email="ada@example.com"):
    return await user_repo.create_user(
        email=email,
        name="Ada",
        password_salt="aa",
        password_hash="bb",
        timezone="Europe/Berlin",
    )


@pytest.mark.asyncio
async def test_create_and_get(user_repo):
    user = await _create(user_repo)

    assert (await user_repo.get_user(user.id)) == user
    assert user.timezone == "Europe/Berlin"


@pytest.mark.asyncio
async def test_timezone_detected_when_absent(user_repo):
    with patch(
        "taskflow_cli.adapters.sqlite.user_repository.get_system_timezone",
        return_value="Asia/Tokyo",
    ):
        user = await user_repo.create_user(
            email="ada@example.com", name="Ada", password_salt="aa", password_hash="bb"
        )

    assert user.timezone == "Asia/Tokyo"


def test_get_system_timezone_uses_zone_key():
    with patch("tzlocal.get_localzone") as get_localzone:
        get_localzone.return_value.key = "America/New_York"
        assert get_system_timezone() == "America/New_York"


@pytest.mark.asyncio
async def test_email_unique_ignoring_case(user_repo):
    await _create(user_repo)

    with pytest.raises(ConflictError):
        await _create(user_repo, "Ada@Example.com")


@pytest.mark.asyncio
async def test_credentials_lookup(user_repo):
    user = await _create(user_repo)

    found, salt, digest = await user_repo.get_credentials("ADA@example.com")

    assert found.id == user.id
    assert (salt, digest) == ("aa", "bb")
    assert await user_repo.get_credentials("nobody@example.com") is None


@pytest.mark.asyncio
async def test_sessions_expire(user_repo):
    user = await _create(user_repo)
    await user_repo.create_session(user.id, "h1", NOW + timedelta(hours=1))
    await user_repo.create_session(user.id, "h2", NOW - timedelta(hours=1))

    assert await user_repo.get_session_user_id("h1", NOW) == user.id
    assert await user_repo.get_session_user_id("h2", NOW) is None
    assert await user_repo.get_session_user_id("h1", NOW + timedelta(hours=1)) is None

    assert await user_repo.purge_expired_sessions(NOW) == 1
    assert await user_repo.delete_session("h1") == 1
    assert await user_repo.delete_session("h1") == 0
