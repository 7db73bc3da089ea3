from dataclasses import dataclass
from datetime import datetime

from sqlalchemy.orm import Session

from backend.core.errors import SessionNotFound
from backend.database import utcnow
from backend.models.session import UserSession


@dataclass(frozen=True)
class ActiveSession:
    user_id: int
    expires_at: datetime


class SessionStore:
    """Persists one row per active session, keyed by the refresh-token hash.

    Every operation is a single statement followed by a commit, so concurrent
    requests never need a lock here.
    """

    def __init__(self, db: Session):
        self.db = db

    def create(
        self,
        *,
        user_id: int,
        refresh_token_hash: str,
        expires_at: datetime,
        ip: str,
        user_agent: str,
    ) -> None:
        self.db.add(
            UserSession(
                user_id=user_id,
                refresh_token_hash=refresh_token_hash,
                expires_at=expires_at,
                ip=ip,
                user_agent=user_agent,
            )
        )
        self.db.commit()

    def find_by_hash(self, refresh_token_hash: str) -> ActiveSession | None:
        """Return the live session for ``refresh_token_hash``.

        Unknown and expired hashes both come back as ``None``; callers cannot
        tell whether a session ever existed.
        """
        row = (
            self.db.query(UserSession.user_id, UserSession.expires_at)
            .filter(
                UserSession.refresh_token_hash == refresh_token_hash,
                UserSession.expires_at > utcnow(),
            )
            .first()
        )
        if row is None:
            return None
        return ActiveSession(user_id=row.user_id, expires_at=row.expires_at)

    def delete_by_hash(self, refresh_token_hash: str) -> None:
        # Idempotent: zero matched rows is not an error.
        self.db.query(UserSession).filter(
            UserSession.refresh_token_hash == refresh_token_hash
        ).delete(synchronize_session=False)
        self.db.commit()

    def update_expiry(self, refresh_token_hash: str, new_expires_at: datetime) -> None:
        updated = (
            self.db.query(UserSession)
            .filter(UserSession.refresh_token_hash == refresh_token_hash)
            .update({UserSession.expires_at: new_expires_at}, synchronize_session=False)
        )
        self.db.commit()
        if not updated:
            raise SessionNotFound()
