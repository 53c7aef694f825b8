"""
Database models for the analytics service.

- UrlRecord: one row per short code, upserted by clicks and enrichment
- ClickEvent: append-only click log
"""

from .click_event import ClickEvent
from .url_record import RecordStatus, UrlRecord, utcnow

__all__ = ["ClickEvent", "RecordStatus", "UrlRecord", "utcnow"]
