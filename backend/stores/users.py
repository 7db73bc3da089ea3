from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from backend.core.errors import EmailInUse, NotFound
from backend.models.user import User

UPDATABLE_FIELDS = ("name", "email", "password_hash", "role")


class UserStore:
    """Credential store: user rows only, no password logic.

    The UNIQUE email column is the final word on duplicates; a caller's
    earlier ``find_by_email`` check can lose a race with another request.
    """

    def __init__(self, db: Session):
        self.db = db

    def find_by_email(self, email: str) -> User | None:
        return self.db.query(User).filter(User.email == email).first()

    def find_by_id(self, user_id: int) -> User | None:
        return self.db.get(User, user_id)

    def create(self, *, name: str, email: str, password_hash: str, role: str) -> int:
        user = User(name=name, email=email, password_hash=password_hash, role=role)
        self.db.add(user)
        self._commit()
        return user.id

    def update(self, user_id: int, **changes) -> User:
        values = {field: value for field, value in changes.items() if field in UPDATABLE_FIELDS}
        if values:
            updated = self.db.query(User).filter(User.id == user_id).update(values)
            self._commit()
        else:
            updated = self.db.query(User).filter(User.id == user_id).count()
        if not updated:
            raise NotFound("User not found")

        user = self.find_by_id(user_id)
        self.db.refresh(user)
        return user

    def _commit(self) -> None:
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise EmailInUse() from exc
