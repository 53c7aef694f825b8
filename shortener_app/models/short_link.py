from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.sql import func

from shortener_app.database.connection import Base


class ShortLink(Base):
    """
    Mapping from a short code to its target URL.

    Rows are written once and never updated or deleted.
    """
    __tablename__ = "short_links"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    # unique=True is the real guard against two requests allocating the same code
    short_code = Column(String(16), unique=True, nullable=False, index=True)
    long_url = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
