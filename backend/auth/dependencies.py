from dataclasses import dataclass

import jwt
from fastapi import Depends, Header
from sqlalchemy.orm import Session

from backend.auth import jwt_handler
from backend.auth.service import AuthService
from backend.core.errors import Unauthorized
from backend.database import get_db
from backend.stores.sessions import SessionStore
from backend.stores.users import UserStore


@dataclass(frozen=True)
class Identity:
    user_id: int
    name: str
    role: str


def get_auth_service(db: Session = Depends(get_db)) -> AuthService:
    return AuthService(UserStore(db), SessionStore(db))


def get_current_user(
    access_token: str | None = Header(default=None, alias="accessToken"),
) -> Identity:
    """Access guard for protected routes.

    Only the token's signature and expiry are checked; storage is never read.
    """
    if not access_token:
        raise Unauthorized(Unauthorized.MISSING)

    try:
        payload = jwt_handler.decode_access_token(access_token)
        return Identity(
            user_id=int(payload["sub"]),
            name=payload.get("name", ""),
            role=payload.get("role", ""),
        )
    except (jwt.InvalidTokenError, KeyError, ValueError) as exc:
        raise Unauthorized(Unauthorized.INVALID_OR_EXPIRED) from exc
