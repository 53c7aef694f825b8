from datetime import timedelta
from typing import Dict, List

from sqlalchemy import func
from sqlalchemy.orm import Session

from analytics_app.models.click_event import ClickEvent
from analytics_app.models.url_record import UrlRecord, utcnow
from analytics_app.schemas.analytics import (
    DailyClicks,
    RecentClick,
    StatsResponse,
    UrlRecordResponse,
)


class StatsService:
    """Read-side queries behind the dashboard."""

    def __init__(
        self,
        db: Session,
        top_urls_limit: int = 5,
        recent_clicks_limit: int = 10,
        days: int = 7
    ):
        self.db = db
        self.top_urls_limit = top_urls_limit
        self.recent_clicks_limit = recent_clicks_limit
        self.days = days

    async def get_stats(self) -> StatsResponse:
        total_urls = self.db.query(func.count(UrlRecord.short_code)).scalar() or 0
        total_clicks = self.db.query(func.coalesce(func.sum(UrlRecord.total_clicks), 0)).scalar()

        return StatsResponse(
            total_urls=total_urls,
            total_clicks=total_clicks,
            top_urls=self._top_urls(),
            recent_clicks=self._recent_clicks(),
            clicks_over_time=self._clicks_over_time(),
            all_urls=self._all_urls(),
        )

    async def get_record(self, short_code: str):
        return self.db.get(UrlRecord, short_code)

    def _top_urls(self) -> List[UrlRecordResponse]:
        records = (
            self.db.query(UrlRecord)
            .filter(UrlRecord.total_clicks > 0)
            .order_by(UrlRecord.total_clicks.desc(), UrlRecord.first_seen.desc())
            .limit(self.top_urls_limit)
            .all()
        )
        return [UrlRecordResponse.model_validate(record) for record in records]

    def _recent_clicks(self) -> List[RecentClick]:
        rows = (
            self.db.query(ClickEvent, UrlRecord.long_url, UrlRecord.title)
            .outerjoin(UrlRecord, UrlRecord.short_code == ClickEvent.short_code)
            .order_by(ClickEvent.clicked_at.desc(), ClickEvent.id.desc())
            .limit(self.recent_clicks_limit)
            .all()
        )
        return [
            RecentClick(
                short_code=event.short_code,
                clicked_at=event.clicked_at,
                long_url=long_url,
                title=title,
            )
            for event, long_url, title in rows
        ]

    def _clicks_over_time(self) -> List[DailyClicks]:
        """Daily click counts for the last ``days`` days, zero-filled"""
        today = utcnow().date()
        start = today - timedelta(days=self.days - 1)

        day = func.date(ClickEvent.clicked_at)
        rows = (
            self.db.query(day, func.count(ClickEvent.id))
            .filter(day >= start.isoformat())
            .group_by(day)
            .all()
        )
        counts: Dict[str, int] = {str(row_day): count for row_day, count in rows}

        series = []
        for offset in range(self.days):
            current = start + timedelta(days=offset)
            series.append(DailyClicks(date=current, clicks=counts.get(current.isoformat(), 0)))
        return series

    def _all_urls(self) -> List[UrlRecordResponse]:
        records = self.db.query(UrlRecord).order_by(UrlRecord.first_seen.desc()).all()
        return [UrlRecordResponse.model_validate(record) for record in records]
