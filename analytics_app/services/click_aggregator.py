"""
Click aggregation.

Every click event is appended to click_events and folded into the
code's UrlRecord (total_clicks + 1, last_clicked moved forward).
Events for codes without a record still count: a minimal pending record
is created so the log and the counters never disagree.
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import case, update
from sqlalchemy.orm import Session

from analytics_app.models.click_event import ClickEvent
from analytics_app.models.url_record import RecordStatus, UrlRecord

logger = logging.getLogger(__name__)


def to_utc_naive(value: datetime) -> datetime:
    """Normalize to the naive-UTC convention of the analytics store"""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


class ClickAggregator:
    """Applies click events to the analytics store."""

    def __init__(self, db: Session):
        self.db = db

    async def record_click(self, short_code: str, clicked_at: datetime) -> UrlRecord:
        """
        Append the event and update the code's counters in one commit.

        Counter updates run as a single UPDATE statement so concurrent
        events never lose increments.
        """
        clicked_at = to_utc_naive(clicked_at)

        self.db.add(ClickEvent(short_code=short_code, clicked_at=clicked_at))

        # Out-of-order (older) events must not rewind last_clicked
        newest_click = case(
            (UrlRecord.last_clicked.is_(None), clicked_at),
            (UrlRecord.last_clicked < clicked_at, clicked_at),
            else_=UrlRecord.last_clicked,
        )
        result = self.db.execute(
            update(UrlRecord)
            .where(UrlRecord.short_code == short_code)
            .values(total_clicks=UrlRecord.total_clicks + 1, last_clicked=newest_click)
            .execution_options(synchronize_session=False)
        )

        if result.rowcount == 0:
            logger.info("Click for unknown code %s, creating a pending record", short_code)
            self.db.add(UrlRecord(
                short_code=short_code,
                long_url=None,
                total_clicks=1,
                first_seen=clicked_at,
                last_clicked=clicked_at,
                status=RecordStatus.PENDING.value,
            ))

        self.db.commit()

        record = self.db.get(UrlRecord, short_code)
        self.db.refresh(record)
        logger.info("Click recorded for %s (total %d)", short_code, record.total_clicks)
        return record
