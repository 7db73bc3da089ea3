"""Register, login, logout and session refresh.

The service owns every mutation of the ``sessions`` table. Raw refresh tokens
only pass through here on their way to or from the client; the store sees
their SHA-256 hash.
"""

import logging
from dataclasses import dataclass
from datetime import datetime

from backend.auth import jwt_handler, refresh_tokens
from backend.auth.passwords import hash_password, verify_password
from backend.auth.validators import normalize_email, validate_login, validate_registration
from backend.core.errors import EmailInUse, InvalidCredentials, SessionInvalid, SessionNotFound
from backend.models.user import User
from backend.stores.sessions import ActiveSession, SessionStore
from backend.stores.users import UserStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoginResult:
    access_token: str
    refresh_token: str
    session_expires_at: datetime


@dataclass(frozen=True)
class RefreshResult:
    access_token: str
    session_expires_at: datetime


def issue_access_token(user: User) -> str:
    return jwt_handler.create_access_token(user.id, user.name, user.role)


class AuthService:
    def __init__(self, users: UserStore, sessions: SessionStore):
        self.users = users
        self.sessions = sessions

    def register(
        self,
        name: str | None,
        email: str | None,
        password: str | None,
        password_confirmation: str | None,
        role: str | None,
    ) -> User:
        validate_registration(
            {
                "name": name,
                "email": email,
                "password": password,
                "password_confirmation": password_confirmation,
                "role": role,
            }
        )
        email = normalize_email(email)
        if self.users.find_by_email(email) is not None:
            raise EmailInUse()

        user_id = self.users.create(
            name=name.strip(),
            email=email,
            password_hash=hash_password(password),
            role=role,
        )
        logger.info("Registered user %s as %s", user_id, role)
        return self.users.find_by_id(user_id)

    def login(
        self,
        email: str | None,
        password: str | None,
        ip: str = "",
        user_agent: str = "",
    ) -> LoginResult:
        validate_login({"email": email, "password": password})

        user = self.users.find_by_email(normalize_email(email))
        if user is None or not verify_password(password, user.password_hash):
            logger.warning("Rejected login attempt from %s", ip or "unknown address")
            raise InvalidCredentials()

        refresh_token = refresh_tokens.generate_refresh_token()
        expires_at = refresh_tokens.session_expiry()
        self.sessions.create(
            user_id=user.id,
            refresh_token_hash=refresh_tokens.hash_refresh_token(refresh_token),
            expires_at=expires_at,
            ip=ip,
            user_agent=user_agent,
        )
        logger.info("User %s logged in", user.id)
        return LoginResult(
            access_token=issue_access_token(user),
            refresh_token=refresh_token,
            session_expires_at=expires_at,
        )

    def logout(self, refresh_token: str | None) -> None:
        if not refresh_token:
            return
        self.sessions.delete_by_hash(refresh_tokens.hash_refresh_token(refresh_token))
        logger.info("Session closed")

    def validate_session(self, refresh_token: str | None) -> ActiveSession:
        if not refresh_token:
            raise SessionInvalid()

        session = self.sessions.find_by_hash(refresh_tokens.hash_refresh_token(refresh_token))
        if session is None:
            logger.warning("Rejected unknown or expired session")
            raise SessionInvalid()
        return session

    def refresh(self, refresh_token: str | None) -> RefreshResult:
        """Mint a new access token and push the session expiry forward.

        The refresh token itself is kept; only ``expires_at`` moves.
        """
        session = self.validate_session(refresh_token)
        user = self.users.find_by_id(session.user_id)
        if user is None:
            raise SessionInvalid()

        expires_at = refresh_tokens.session_expiry()
        try:
            self.sessions.update_expiry(refresh_tokens.hash_refresh_token(refresh_token), expires_at)
        except SessionNotFound as exc:
            # Logged out by another request between lookup and update.
            raise SessionInvalid() from exc

        logger.info("Refreshed session for user %s", user.id)
        return RefreshResult(access_token=issue_access_token(user), session_expires_at=expires_at)
