"""Opaque refresh tokens: the raw value goes to the client, only its hash is stored."""

import hashlib
import secrets
from datetime import datetime, timedelta

from backend.core import config
from backend.database import utcnow


def generate_refresh_token() -> str:
    return secrets.token_hex(config.REFRESH_TOKEN_BYTES)


def hash_refresh_token(raw_token: str) -> str:
    return hashlib.sha256(raw_token.encode()).hexdigest()


def session_expiry(now: datetime | None = None) -> datetime:
    return (now or utcnow()) + timedelta(days=config.REFRESH_TOKEN_EXPIRES_DAYS)
