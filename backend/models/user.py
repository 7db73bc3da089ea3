"""User model definitions."""

from sqlalchemy import CheckConstraint, Column, Integer, String
from backend.database import Base

USER_ROLES = ("student", "teacher")


class User(Base):
    """Represents a registered student or teacher."""
    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("role IN ('student', 'teacher')", name="ck_users_role"),
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    role = Column(String, nullable=False)  # student/teacher
