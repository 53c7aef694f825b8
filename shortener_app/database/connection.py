from typing import Iterator

from fastapi import Request
from sqlalchemy.orm import DeclarativeBase, Session

from common.database import Database


class Base(DeclarativeBase):
    pass


def get_database(request: Request) -> Database:
    """Store handle built by create_app()"""
    return request.app.state.database


def get_db(request: Request) -> Iterator[Session]:
    """Request-scoped session on the service's store"""
    yield from get_database(request).get_session()
