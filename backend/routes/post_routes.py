from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel
from sqlalchemy import or_
from sqlalchemy.orm import Session

from backend.auth.dependencies import Identity, get_current_user
from backend.auth.validators import require_fields
from backend.core.errors import Forbidden, NotFound, ValidationError
from backend.database import get_db
from backend.models.comment import Comment
from backend.models.like import Like
from backend.models.post import Post

router = APIRouter(tags=['posts'])

POST_FIELDS = ('title', 'content', 'subject')


class CreatePostRequest(BaseModel):
    title: str | None = None
    content: str | None = None
    subject: str | None = None


class UpdatePostRequest(BaseModel):
    title: str | None = None
    content: str | None = None
    subject: str | None = None


class PostResponse(BaseModel):
    id: int
    title: str
    content: str
    subject: str | None = None
    author_id: int

    class Config:
        from_attributes = True


def get_post_or_404(post_id: int, db: Session) -> Post:
    post = db.get(Post, post_id)
    if post is None:
        raise NotFound('Post not found')
    return post


def ensure_author(post: Post, current_user: Identity) -> None:
    if post.author_id != current_user.user_id:
        raise Forbidden('Only the author can change this post.')


@router.get('', response_model=list[PostResponse])
def list_posts(search: str | None = Query(default=None), db: Session = Depends(get_db)):
    query = db.query(Post)
    if search and search.strip():
        pattern = f'%{search.strip()}%'
        query = query.filter(or_(Post.title.ilike(pattern), Post.content.ilike(pattern)))
    return query.order_by(Post.id.desc()).all()


@router.get('/{post_id}', response_model=PostResponse)
def read_post(post_id: int, db: Session = Depends(get_db)):
    return get_post_or_404(post_id, db)


@router.post('', response_model=PostResponse, status_code=status.HTTP_201_CREATED)
def create_post(
    payload: CreatePostRequest,
    current_user: Identity = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    require_fields(payload.model_dump(), ('title', 'content'))

    post = Post(
        title=payload.title.strip(),
        content=payload.content,
        subject=payload.subject,
        author_id=current_user.user_id,
    )
    db.add(post)
    db.commit()
    db.refresh(post)
    return post


@router.put('/{post_id}', response_model=PostResponse)
def update_post(
    post_id: int,
    payload: UpdatePostRequest,
    current_user: Identity = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    post = get_post_or_404(post_id, db)
    ensure_author(post, current_user)

    changes = payload.model_dump(exclude_none=True)
    if not changes:
        raise ValidationError('fields', 'No fields provided for update')

    for field in POST_FIELDS:
        if field in changes:
            setattr(post, field, changes[field])
    db.commit()
    db.refresh(post)
    return post


@router.delete('/{post_id}', response_model=PostResponse)
def delete_post(
    post_id: int,
    current_user: Identity = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    post = get_post_or_404(post_id, db)
    ensure_author(post, current_user)

    deleted = PostResponse.model_validate(post)
    db.query(Like).filter(Like.post_id == post.id).delete(synchronize_session=False)
    db.query(Comment).filter(Comment.post_id == post.id).delete(synchronize_session=False)
    db.delete(post)
    db.commit()
    return deleted
