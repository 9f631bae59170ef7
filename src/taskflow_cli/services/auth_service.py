"""Service for handling authentication-related operations.

Accounts live in the local store. Logging in opens a session whose token is
handed to the caller once; only its SHA-256 digest is stored, so a copy of
the database cannot be replayed as a login.
"""

from __future__ import annotations

import hashlib
import hmac
import secrets
from datetime import datetime, timedelta

from pydantic import ValidationError

from taskflow_cli.models import (
    AuthenticationError,
    User,
    UserCreate,
    ValidationFailure,
)
from taskflow_cli.repositories import UserRepository
from taskflow_cli.utils.datetime_utils import utc_now
from taskflow_cli.utils.logger import get_logger

PBKDF2_ITERATIONS = 100_000
DEFAULT_SESSION_TTL_HOURS = 24 * 14

_INVALID_CREDENTIALS = "Invalid email or password"


def hash_password(password: str, salt: str) -> str:
    """Derive the stored digest of ``password`` with a hex ``salt``."""
    digest = hashlib.pbkdf2_hmac(
        "sha256", password.encode("utf-8"), bytes.fromhex(salt), PBKDF2_ITERATIONS
    )
    return digest.hex()


def hash_token(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


class AuthService:
    """Service for registration, login sessions and identity resolution."""

    def __init__(
        self,
        user_repository: UserRepository,
        session_ttl_hours: int = DEFAULT_SESSION_TTL_HOURS,
    ):
        self.repository = user_repository
        self.session_ttl = timedelta(hours=session_ttl_hours)

    async def register(self, email: str, name: str, password: str) -> User:
        """Create an account.

        Raises:
            ValidationFailure: If the email is malformed, the name blank or
                the password shorter than 8 characters
            ConflictError: If the email is already registered
        """
        try:
            data = UserCreate(email=email, name=name, password=password)
        except ValidationError as e:
            raise ValidationFailure.from_pydantic(e) from e

        salt = secrets.token_hex(16)
        user = await self.repository.create_user(
            email=data.email,
            name=data.name,
            password_salt=salt,
            password_hash=hash_password(data.password, salt),
        )
        get_logger("auth").info("registered user %s", user.id)
        return user

    async def login(self, email: str, password: str, now: datetime | None = None) -> str:
        """Check credentials and open a session.

        Returns:
            The session token; it is not retrievable later

        Raises:
            AuthenticationError: If the email is unknown or the password wrong.
                Both cases produce the same message.
        """
        now = now or utc_now()
        record = await self.repository.get_credentials(email.strip())
        if record is None:
            raise AuthenticationError(_INVALID_CREDENTIALS)

        user, salt, expected = record
        if not hmac.compare_digest(hash_password(password, salt), expected):
            get_logger("auth").warning("failed login for user %s", user.id)
            raise AuthenticationError(_INVALID_CREDENTIALS)

        await self.repository.purge_expired_sessions(now)
        token = secrets.token_urlsafe(32)
        await self.repository.create_session(user.id, hash_token(token), now + self.session_ttl)
        get_logger("auth").info("user %s logged in", user.id)
        return token

    async def logout(self, token: str) -> bool:
        """End a session; returns False if it was already gone."""
        return await self.repository.delete_session(hash_token(token)) > 0

    async def resolve_identity(self, token: str | None, now: datetime | None = None) -> str:
        """Map a session token to the id of its user.

        Raises:
            AuthenticationError: If the token is missing, unknown or expired
        """
        if not token:
            raise AuthenticationError("Not logged in. Use 'taskflow auth login' first.")
        user_id = await self.repository.get_session_user_id(
            hash_token(token), now or utc_now()
        )
        if user_id is None:
            raise AuthenticationError(
                "Session expired or invalid. Use 'taskflow auth login' again."
            )
        return user_id

    async def current_user(self, token: str | None) -> User:
        """Return the account behind a session token."""
        user_id = await self.resolve_identity(token)
        user = await self.repository.get_user(user_id)
        if user is None:
            raise AuthenticationError("Session user no longer exists")
        return user


def get_auth_service(profile: str = "default") -> AuthService:
    """Factory function to get an AuthService instance."""
    from taskflow_cli.config import get_config_manager
    from taskflow_cli.services.storage import get_storage

    ttl = get_config_manager(profile).config.auth.session_ttl_hours
    return AuthService(get_storage(profile).user_repository, session_ttl_hours=ttl)


def load_session_token(profile: str = "default") -> str | None:
    """Return the token saved by the last login of ``profile``, if any."""
    from taskflow_cli.config import get_config_manager

    credentials = get_config_manager(profile).load_credentials()
    return credentials.get("token") if credentials else None


async def resolve_current_user_id(profile: str = "default") -> str:
    """Identity of the logged-in user of ``profile``.

    Raises:
        AuthenticationError: If nobody is logged in or the session expired
    """
    return await get_auth_service(profile).resolve_identity(load_session_token(profile))
