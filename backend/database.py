from collections.abc import Iterator
from datetime import datetime, timezone

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from backend.core import config


Base = declarative_base()


def utcnow() -> datetime:
    """Current UTC time as a naive datetime, the form every table stores."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _engine_options(url: str, timeout: int) -> dict:
    if not url.startswith("sqlite"):
        return {"pool_pre_ping": True, "pool_timeout": timeout}

    options = {"connect_args": {"check_same_thread": False, "timeout": timeout}}
    if url in {"sqlite://", "sqlite:///:memory:"}:
        # A single shared connection keeps the in-memory database alive across threads.
        options["poolclass"] = StaticPool
    return options


class Database:
    """Store handle owned by the application: opened on startup, disposed on shutdown."""

    def __init__(self, url: str | None = None, timeout: int | None = None):
        self.url = url or config.DATABASE_URL
        self.engine: Engine = create_engine(
            self.url,
            **_engine_options(self.url, timeout or config.DB_TIMEOUT_SECONDS),
        )
        self.session_factory = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=self.engine,
        )

    def create_all(self) -> None:
        # Registers every table on Base.metadata before creating them.
        from backend.models import comment, like, post, session, user  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    def session(self) -> Session:
        return self.session_factory()

    def dispose(self) -> None:
        self.engine.dispose()


def get_db(request: Request) -> Iterator[Session]:
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()
