"""Like model definitions."""

from sqlalchemy import Column, Integer, DateTime, ForeignKey, UniqueConstraint
from backend.database import Base, utcnow


class Like(Base):
    """One user's like on one post."""
    __tablename__ = "likes"
    __table_args__ = (UniqueConstraint("user_id", "post_id", name="uq_likes_user_post"),)

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    post_id = Column(Integer, ForeignKey("posts.id"), nullable=False, index=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
