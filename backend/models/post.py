"""Post model definitions."""

from sqlalchemy import Column, Integer, ForeignKey, String, Text
from backend.database import Base


class Post(Base):
    """Represents a post published to the class feed."""
    __tablename__ = "posts"

    id = Column(Integer, primary_key=True)
    title = Column(String, nullable=False)
    content = Column(Text, nullable=False)
    subject = Column(String)
    author_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
