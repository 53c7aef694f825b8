from sqlalchemy import Column, DateTime, Integer, String

from analytics_app.database.connection import Base


class ClickEvent(Base):
    """One followed redirect, as reported by the redirect service."""
    __tablename__ = "click_events"

    id = Column(Integer, primary_key=True, autoincrement=True)
    short_code = Column(String(16), nullable=False, index=True)
    clicked_at = Column(DateTime, nullable=False, index=True)
