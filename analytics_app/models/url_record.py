import enum
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer, String

from analytics_app.database.connection import Base


def utcnow() -> datetime:
    """Naive UTC now; every timestamp in this store is naive UTC."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class RecordStatus(str, enum.Enum):
    """Outcome of the last enrichment attempt"""
    PENDING = "pending"
    SUCCESS = "success"
    FAILED = "failed"


class UrlRecord(Base):
    """
    Per-code aggregate shown on the dashboard.

    long_url is null for codes first seen through a click event
    (created by the redirect service directly, not via the dashboard).
    """
    __tablename__ = "url_records"

    short_code = Column(String(16), primary_key=True)
    long_url = Column(String, nullable=True)
    total_clicks = Column(Integer, nullable=False, default=0)
    first_seen = Column(DateTime, nullable=False, default=utcnow)
    last_clicked = Column(DateTime, nullable=True)
    title = Column(String, nullable=True)
    description = Column(String, nullable=True)
    favicon_url = Column(String, nullable=True)
    status = Column(String(16), nullable=False, default=RecordStatus.PENDING.value)
