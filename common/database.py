"""
Store handle shared by the services.

Every service builds one Database at startup (see each service's
``create_app``), keeps it on ``app.state`` and hands request-scoped
sessions to handlers through a FastAPI dependency.

Usage:
    database = Database("sqlite:///./shortener.db")
    database.create_tables(Base)

    def get_db(request: Request):
        yield from request.app.state.database.get_session()
"""

import logging
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

logger = logging.getLogger(__name__)


class Database:
    """Engine + session factory for one service's private store."""

    def __init__(self, database_url: str, echo: bool = False):
        self.database_url = database_url

        connect_args = {}
        if database_url.startswith("sqlite"):
            # SQLite + FastAPI threadpool
            connect_args["check_same_thread"] = False

        self.engine = create_engine(
            database_url,
            echo=echo,
            connect_args=connect_args,
        )
        self.SessionLocal = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=self.engine,
        )

    def create_tables(self, base: type[DeclarativeBase]) -> None:
        """Create the service's tables if they don't exist yet"""
        base.metadata.create_all(bind=self.engine)
        logger.info("Database ready at %s", self.database_url)

    def drop_tables(self, base: type[DeclarativeBase]) -> None:
        base.metadata.drop_all(bind=self.engine)

    def get_session(self) -> Iterator[Session]:
        """Yield a session and always close it afterwards."""
        db = self.SessionLocal()
        try:
            yield db
        finally:
            db.close()

    def dispose(self) -> None:
        self.engine.dispose()
