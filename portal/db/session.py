import logging
from typing import Iterator

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from portal.db.base import Base

logger = logging.getLogger(__name__)


class Database:
    """Store handle owned by the application.

    Built once by the application factory, initialized at startup and
    disposed at shutdown. Request handlers receive sessions from it
    through ``get_db``.
    """

    def __init__(self, url: str):
        self.url = url
        engine_kwargs = {}
        if url.startswith("sqlite"):
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            if ":memory:" in url or url in ("sqlite://", "sqlite+pysqlite://"):
                # A single shared connection keeps the in-memory database alive
                engine_kwargs["poolclass"] = StaticPool
        self.engine = create_engine(url, **engine_kwargs)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def init(self) -> None:
        # Import models so they register on the metadata
        from portal.models import admin, assignment, submission, user  # noqa: F401

        Base.metadata.create_all(bind=self.engine)
        logger.info("Database initialized")

    def dispose(self) -> None:
        self.engine.dispose()
        logger.info("Database connections closed")

    def ping(self) -> bool:
        try:
            with self.engine.connect() as connection:
                connection.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"Database health check failed: {str(e)}")
            return False

    def session(self) -> Iterator[Session]:
        db = self.SessionLocal()
        try:
            yield db
        finally:
            db.close()


# Dependency
def get_db(request: Request) -> Iterator[Session]:
    yield from request.app.state.db.session()
