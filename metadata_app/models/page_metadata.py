from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.sql import func

from metadata_app.database.connection import Base


class PageMetadata(Base):
    """
    Latest scrape result for one short code.

    Re-fetching a code overwrites its row; no history is kept.
    """
    __tablename__ = "page_metadata"

    id = Column(Integer, primary_key=True, autoincrement=True)
    short_code = Column(String(16), unique=True, nullable=False, index=True)
    url = Column(String, nullable=False)
    title = Column(String, nullable=True)
    description = Column(String, nullable=True)
    favicon_url = Column(String, nullable=True)
    fetched_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
