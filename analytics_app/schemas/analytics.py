from datetime import date, datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from analytics_app.models.url_record import RecordStatus


class ClickEventIn(BaseModel):
    """Body of POST /api/events, sent by the redirect service"""
    short_code: str = Field(..., min_length=1, description="The short code that was followed")
    clicked_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="RFC3339 timestamp of the redirect"
    )


class EventRecorded(BaseModel):
    status: str = "recorded"
    short_code: str
    total_clicks: int


class UrlRecordResponse(BaseModel):
    """Serializes the UrlRecord model (ORM mode)"""
    short_code: str
    long_url: Optional[str] = None
    total_clicks: int
    first_seen: datetime
    last_clicked: Optional[datetime] = None
    title: Optional[str] = None
    description: Optional[str] = None
    favicon_url: Optional[str] = None
    status: RecordStatus

    model_config = ConfigDict(from_attributes=True)


class RecentClick(BaseModel):
    short_code: str
    clicked_at: datetime
    long_url: Optional[str] = None
    title: Optional[str] = None


class DailyClicks(BaseModel):
    date: date
    clicks: int


class StatsResponse(BaseModel):
    total_urls: int
    total_clicks: int
    top_urls: List[UrlRecordResponse]
    recent_clicks: List[RecentClick]
    clicks_over_time: List[DailyClicks]
    all_urls: List[UrlRecordResponse]
