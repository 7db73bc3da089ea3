"""Session model definitions."""

from sqlalchemy import Column, Integer, DateTime, ForeignKey, String
from backend.database import Base


class UserSession(Base):
    """Binds the SHA-256 hash of a refresh token to a user and an expiry."""
    __tablename__ = "sessions"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    refresh_token_hash = Column(String(64), unique=True, nullable=False)
    expires_at = Column(DateTime, nullable=False)
    ip = Column(String, nullable=False, default="")
    user_agent = Column(String, nullable=False, default="")
