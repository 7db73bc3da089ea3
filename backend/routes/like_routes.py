from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from backend.auth.dependencies import Identity, get_current_user
from backend.database import get_db
from backend.models.like import Like
from backend.routes.post_routes import get_post_or_404

router = APIRouter(tags=['likes'])


class ToggleLikeResponse(BaseModel):
    liked: bool
    count: int


class PostLikesResponse(BaseModel):
    count: int
    user_ids: list[int]


def count_likes(post_id: int, db: Session) -> int:
    return db.query(Like).filter(Like.post_id == post_id).count()


@router.post('/posts/{post_id}/like', response_model=ToggleLikeResponse)
def toggle_like(
    post_id: int,
    current_user: Identity = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    get_post_or_404(post_id, db)

    removed = (
        db.query(Like)
        .filter(Like.post_id == post_id, Like.user_id == current_user.user_id)
        .delete(synchronize_session=False)
    )
    if removed:
        db.commit()
        return ToggleLikeResponse(liked=False, count=count_likes(post_id, db))

    db.add(Like(post_id=post_id, user_id=current_user.user_id))
    try:
        db.commit()
    except IntegrityError:
        # A concurrent request already liked it.
        db.rollback()
    return ToggleLikeResponse(liked=True, count=count_likes(post_id, db))


@router.get('/posts/{post_id}/likes', response_model=PostLikesResponse)
def list_post_likes(post_id: int, db: Session = Depends(get_db)):
    get_post_or_404(post_id, db)
    likes = db.query(Like.user_id).filter(Like.post_id == post_id).order_by(Like.id).all()
    return PostLikesResponse(count=len(likes), user_ids=[like.user_id for like in likes])
