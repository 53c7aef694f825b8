"""
Test configuration and fixtures for the three services.

Every test gets fresh SQLite files under tmp_path, so services never
share state between tests. Outbound HTTP is replaced with in-process
transports (httpx.MockTransport / httpx.ASGITransport).
"""

from typing import List, Optional

import pytest
from fastapi.testclient import TestClient

from analytics_app.config import Settings as AnalyticsSettings
from analytics_app.main import create_app as create_analytics_app
from common.database import Database
from metadata_app.config import Settings as MetadataSettings
from metadata_app.main import create_app as create_metadata_app
from shortener_app.config import Settings as ShortenerSettings
from shortener_app.database.connection import Base as ShortenerBase
from shortener_app.dependencies import get_notifier
from shortener_app.main import create_app as create_shortener_app


class RecordingNotifier:
    """Stands in for ClickNotifier and remembers what it was asked to send."""

    def __init__(self):
        self.sent: List[str] = []

    async def notify(self, short_code: str, clicked_at=None) -> bool:
        self.sent.append(short_code)
        return True


class SequenceStrategy:
    """Short code strategy that hands out a fixed list of codes."""

    def __init__(self, codes: List[str]):
        self.codes = list(codes)
        self.calls = 0

    def generate(self) -> str:
        code = self.codes[min(self.calls, len(self.codes) - 1)]
        self.calls += 1
        return code


# ---------- Redirect service ----------

@pytest.fixture
def shortener_settings(tmp_path) -> ShortenerSettings:
    return ShortenerSettings(
        database_url=f"sqlite:///{tmp_path / 'shortener.db'}",
        base_url="http://short.test",
        analytics_base_url="http://analytics.test",
        cache_backend="memory",
    )


@pytest.fixture
def shortener_app(shortener_settings):
    return create_shortener_app(shortener_settings)


@pytest.fixture
def recording_notifier():
    return RecordingNotifier()


@pytest.fixture
def client(shortener_app, recording_notifier):
    """Redirect service client with click notifications captured in memory."""
    shortener_app.dependency_overrides[get_notifier] = lambda: recording_notifier

    with TestClient(shortener_app) as test_client:
        yield test_client

    shortener_app.dependency_overrides.clear()


@pytest.fixture
def db_session(tmp_path):
    """
    Fresh redirect-service database session for service-level tests.
    """
    database = Database(f"sqlite:///{tmp_path / 'shortener_unit.db'}")
    database.create_tables(ShortenerBase)
    session = database.SessionLocal()

    try:
        yield session
    finally:
        session.close()
        database.drop_tables(ShortenerBase)
        database.dispose()


# ---------- Analytics service ----------

@pytest.fixture
def analytics_settings(tmp_path) -> AnalyticsSettings:
    return AnalyticsSettings(
        database_url=f"sqlite:///{tmp_path / 'analytics.db'}",
        shortener_base_url="http://shortener.test",
        metadata_base_url="http://metadata.test",
    )


@pytest.fixture
def analytics_app(analytics_settings):
    return create_analytics_app(analytics_settings)


@pytest.fixture
def analytics_client(analytics_app):
    with TestClient(analytics_app) as test_client:
        yield test_client

    analytics_app.dependency_overrides.clear()


# ---------- Metadata service ----------

@pytest.fixture
def metadata_settings(tmp_path) -> MetadataSettings:
    return MetadataSettings(database_url=f"sqlite:///{tmp_path / 'metadata.db'}")


@pytest.fixture
def metadata_app(metadata_settings):
    return create_metadata_app(metadata_settings)


@pytest.fixture
def metadata_client(metadata_app):
    with TestClient(metadata_app) as test_client:
        yield test_client


def html_page(title: Optional[str] = None, head: str = "") -> str:
    """Small HTML document builder for extractor tests"""
    title_tag = f"<title>{title}</title>" if title is not None else ""
    return f"<html><head>{title_tag}{head}</head><body><p>Hello</p></body></html>"
