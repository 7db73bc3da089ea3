"""Comment model definitions."""

from sqlalchemy import Column, Integer, DateTime, ForeignKey, Text
from backend.database import Base, utcnow


class Comment(Base):
    """Represents a comment on a post, optionally replying to another comment."""
    __tablename__ = "comments"

    id = Column(Integer, primary_key=True)
    post_id = Column(Integer, ForeignKey("posts.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    content = Column(Text, nullable=False)
    reply_to_id = Column(Integer, ForeignKey("comments.id"))
    created_at = Column(DateTime, nullable=False, default=utcnow)
