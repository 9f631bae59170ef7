"""SQLite implementation of UserRepository (accounts and sessions)."""

from __future__ import annotations

import sqlite3
from datetime import datetime

import tzlocal

from taskflow_cli.adapters.sqlite.connection import get_connection
from taskflow_cli.adapters.sqlite.utils import (
    generate_uuid,
    now_iso,
    row_to_dict,
    to_db_value,
    translate_errors,
)
from taskflow_cli.models import ConflictError, User
from taskflow_cli.repositories import UserRepository

_USER_COLUMNS = "id, email, name, timezone, created_at, updated_at"


def get_system_timezone() -> str:
    """Detect system timezone.

    Returns:
        Timezone string (e.g., "America/New_York" or "UTC" if detection fails)
    """
    tz = tzlocal.get_localzone()
    return str(tz.key) if hasattr(tz, "key") else str(tz)


class SqliteUserRepository(UserRepository):
    """SQLite implementation of user repository."""

    def __init__(self, db_path: str | None = None):
        self.db_path = db_path
        self._connection: sqlite3.Connection | None = None

    @property
    def connection(self) -> sqlite3.Connection:
        """Get or create database connection."""
        if self._connection is None:
            self._connection = get_connection(self.db_path)
        return self._connection

    async def create_user(
        self,
        *,
        email: str,
        name: str,
        password_salt: str,
        password_hash: str,
        timezone: str | None = None,
    ) -> User:
        user_id = generate_uuid()
        now = now_iso()

        if timezone is None:
            timezone = get_system_timezone()

        with translate_errors():
            try:
                self.connection.execute(
                    """
                    INSERT INTO users (
                        id, email, name, timezone, password_salt, password_hash,
                        created_at, updated_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (user_id, email, name, timezone, password_salt, password_hash, now, now),
                )
            except sqlite3.IntegrityError as e:
                raise ConflictError(f"Email already registered: {email}") from e

        return await self.get_user(user_id)

    async def get_user(self, user_id: str) -> User | None:
        with translate_errors():
            row = self.connection.execute(
                f"SELECT {_USER_COLUMNS} FROM users WHERE id = ?", (user_id,)
            ).fetchone()
        return User(**row_to_dict(row)) if row else None

    async def get_credentials(self, email: str) -> tuple[User, str, str] | None:
        with translate_errors():
            row = self.connection.execute(
                f"SELECT {_USER_COLUMNS}, password_salt, password_hash "
                "FROM users WHERE email = ?",
                (email,),
            ).fetchone()
        if row is None:
            return None
        user_dict = row_to_dict(row)
        salt = user_dict.pop("password_salt")
        digest = user_dict.pop("password_hash")
        return User(**user_dict), salt, digest

    async def create_session(
        self, user_id: str, token_hash: str, expires_at: datetime
    ) -> None:
        with translate_errors():
            self.connection.execute(
                """
                INSERT INTO sessions (token_hash, user_id, created_at, expires_at)
                VALUES (?, ?, ?, ?)
                """,
                (token_hash, user_id, now_iso(), to_db_value(expires_at)),
            )

    async def get_session_user_id(self, token_hash: str, now: datetime) -> str | None:
        with translate_errors():
            row = self.connection.execute(
                "SELECT user_id FROM sessions WHERE token_hash = ? AND expires_at > ?",
                (token_hash, to_db_value(now)),
            ).fetchone()
        return row["user_id"] if row else None

    async def delete_session(self, token_hash: str) -> int:
        with translate_errors():
            cursor = self.connection.execute(
                "DELETE FROM sessions WHERE token_hash = ?", (token_hash,)
            )
        return cursor.rowcount

    async def purge_expired_sessions(self, now: datetime) -> int:
        with translate_errors():
            cursor = self.connection.execute(
                "DELETE FROM sessions WHERE expires_at <= ?", (to_db_value(now),)
            )
        return cursor.rowcount
