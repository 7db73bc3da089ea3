from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from backend.auth.dependencies import Identity, get_current_user
from backend.auth.passwords import hash_password
from backend.auth.validators import (
    STEP_EMAIL,
    STEP_PASSWORD_CONFIRMATION,
    is_valid_email,
    normalize_email,
    validate_password,
)
from backend.core.errors import EmailInUse, NotFound, ValidationError
from backend.database import get_db
from backend.models.like import Like
from backend.routes.auth_routes import UserResponse
from backend.stores.users import UserStore

router = APIRouter(tags=['users'])


class UpdateProfileRequest(BaseModel):
    name: str | None = None
    email: str | None = None
    password: str | None = None
    password_confirmation: str | None = None


class UserLikesResponse(BaseModel):
    post_ids: list[int]


@router.get('/me', response_model=UserResponse)
def read_profile(current_user: Identity = Depends(get_current_user), db: Session = Depends(get_db)):
    user = UserStore(db).find_by_id(current_user.user_id)
    if user is None:
        raise NotFound('User not found')
    return user


@router.put('/me', response_model=UserResponse)
def update_profile(
    payload: UpdateProfileRequest,
    current_user: Identity = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    users = UserStore(db)
    changes: dict[str, str] = {}

    if payload.name and payload.name.strip():
        changes['name'] = payload.name.strip()

    if payload.email is not None:
        email = normalize_email(payload.email)
        if not is_valid_email(email):
            raise ValidationError(STEP_EMAIL, 'Invalid email address')
        existing = users.find_by_email(email)
        if existing is not None and existing.id != current_user.user_id:
            raise EmailInUse()
        changes['email'] = email

    if payload.password:
        if payload.password != payload.password_confirmation:
            raise ValidationError(STEP_PASSWORD_CONFIRMATION, 'Passwords do not match')
        validate_password(payload.password)
        # Other sessions of this user stay valid.
        changes['password_hash'] = hash_password(payload.password)

    return users.update(current_user.user_id, **changes)


@router.get('/me/likes', response_model=UserLikesResponse)
def list_my_likes(current_user: Identity = Depends(get_current_user), db: Session = Depends(get_db)):
    likes = (
        db.query(Like.post_id)
        .filter(Like.user_id == current_user.user_id)
        .order_by(Like.created_at.desc(), Like.id.desc())
        .all()
    )
    return UserLikesResponse(post_ids=[like.post_id for like in likes])
