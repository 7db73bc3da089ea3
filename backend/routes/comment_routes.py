from datetime import datetime

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel
from sqlalchemy.orm import Session

from backend.auth.dependencies import Identity, get_current_user
from backend.auth.validators import require_fields
from backend.core.errors import Forbidden, NotFound, ValidationError
from backend.database import get_db
from backend.models.comment import Comment
from backend.routes.post_routes import get_post_or_404

router = APIRouter(tags=['comments'])


class CreateCommentRequest(BaseModel):
    content: str | None = None
    reply_to_id: int | None = None


class UpdateCommentRequest(BaseModel):
    content: str | None = None


class CommentResponse(BaseModel):
    id: int
    post_id: int
    user_id: int
    content: str
    reply_to_id: int | None = None
    created_at: datetime

    class Config:
        from_attributes = True


def get_own_comment(comment_id: int, current_user: Identity, db: Session) -> Comment:
    comment = db.get(Comment, comment_id)
    if comment is None:
        raise NotFound('Comment not found')
    if comment.user_id != current_user.user_id:
        raise Forbidden('Only the author can change this comment.')
    return comment


@router.post('/posts/{post_id}/comments', response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
def create_comment(
    post_id: int,
    payload: CreateCommentRequest,
    current_user: Identity = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    get_post_or_404(post_id, db)
    require_fields(payload.model_dump(), ('content',))

    if payload.reply_to_id is not None:
        parent = db.get(Comment, payload.reply_to_id)
        if parent is None or parent.post_id != post_id:
            raise ValidationError('reply_to_id', 'Reply target must be a comment on the same post')

    comment = Comment(
        post_id=post_id,
        user_id=current_user.user_id,
        content=payload.content,
        reply_to_id=payload.reply_to_id,
    )
    db.add(comment)
    db.commit()
    db.refresh(comment)
    return comment


@router.get('/posts/{post_id}/comments', response_model=list[CommentResponse])
def list_comments(post_id: int, db: Session = Depends(get_db)):
    get_post_or_404(post_id, db)
    return (
        db.query(Comment)
        .filter(Comment.post_id == post_id)
        .order_by(Comment.created_at, Comment.id)
        .all()
    )


@router.put('/comments/{comment_id}', response_model=CommentResponse)
def update_comment(
    comment_id: int,
    payload: UpdateCommentRequest,
    current_user: Identity = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    comment = get_own_comment(comment_id, current_user, db)
    require_fields(payload.model_dump(), ('content',))

    comment.content = payload.content
    db.commit()
    db.refresh(comment)
    return comment


@router.delete('/comments/{comment_id}', response_model=CommentResponse)
def delete_comment(
    comment_id: int,
    current_user: Identity = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    comment = get_own_comment(comment_id, current_user, db)

    deleted = CommentResponse.model_validate(comment)
    # Replies survive their parent as top-level comments.
    db.query(Comment).filter(Comment.reply_to_id == comment.id).update(
        {Comment.reply_to_id: None}, synchronize_session=False
    )
    db.delete(comment)
    db.commit()
    return deleted
