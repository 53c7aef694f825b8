from fastapi import APIRouter, Depends

from analytics_app.dependencies import get_click_aggregator
from analytics_app.schemas.analytics import ClickEventIn, EventRecorded
from analytics_app.services.click_aggregator import ClickAggregator

router = APIRouter(prefix="/api", tags=["events"])


@router.post("/events", response_model=EventRecorded)
async def record_click_event(
    event: ClickEventIn,
    aggregator: ClickAggregator = Depends(get_click_aggregator)
):
    """Receive a click notification from the redirect service"""
    record = await aggregator.record_click(event.short_code, event.clicked_at)
    return EventRecorded(short_code=record.short_code, total_clicks=record.total_clicks)
