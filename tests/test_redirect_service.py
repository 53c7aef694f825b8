import re

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from conftest import SequenceStrategy
from shortener_app.dependencies import get_link_service, get_notifier, get_short_code_strategy
from shortener_app.services.click_notifier import ClickNotifier

CODE_PATTERN = re.compile(r"^[A-Za-z0-9_-]{6}$")


class TestShortenEndpoint:
    """Test POST /api/shorten"""

    def test_create_short_url(self, client: TestClient):
        response = client.post("/api/shorten", json={"long_url": "https://example.com"})
        assert response.status_code == 200

        data = response.json()
        assert CODE_PATTERN.match(data["short_code"])
        assert data["short_url"] == f"http://short.test/{data['short_code']}"
        assert data["long_url"] == "https://example.com"

    def test_long_url_kept_verbatim(self, client: TestClient):
        response = client.post("/api/shorten", json={"long_url": "https://example.com/a?b=1#c"})

        assert response.json()["long_url"] == "https://example.com/a?b=1#c"

    def test_missing_long_url(self, client: TestClient):
        response = client.post("/api/shorten", json={})

        assert response.status_code == 400
        assert "long_url" in response.json()["detail"]

    def test_invalid_long_url(self, client: TestClient):
        response = client.post("/api/shorten", json={"long_url": "not-a-valid-url"})

        assert response.status_code == 400

    def test_blank_long_url(self, client: TestClient):
        response = client.post("/api/shorten", json={"long_url": "   "})

        assert response.status_code == 400

    def test_exhausted_allocation_returns_503(self, shortener_app, client: TestClient):
        taken = client.post("/api/shorten", json={"long_url": "https://example.com"}).json()["short_code"]
        shortener_app.dependency_overrides[get_short_code_strategy] = lambda: SequenceStrategy([taken])

        response = client.post("/api/shorten", json={"long_url": "https://other.example"})

        assert response.status_code == 503


class TestRedirectEndpoint:
    """Test GET /{short_code}"""

    def test_redirect_url(self, client: TestClient):
        short_code = client.post("/api/shorten", json={"long_url": "https://www.github.com/"}).json()["short_code"]

        response = client.get(f"/{short_code}", follow_redirects=False)

        assert response.status_code == 301
        assert response.headers["location"] == "https://www.github.com/"

    def test_repeated_redirects_same_target(self, client: TestClient):
        short_code = client.post("/api/shorten", json={"long_url": "https://www.python.org"}).json()["short_code"]

        locations = {
            client.get(f"/{short_code}", follow_redirects=False).headers["location"]
            for _ in range(5)
        }

        assert locations == {"https://www.python.org"}

    def test_redirect_nonexistent_url(self, client: TestClient, recording_notifier):
        response = client.get("/nonexistent", follow_redirects=False)

        assert response.status_code == 404
        assert recording_notifier.sent == []

    def test_redirect_notifies_analytics(self, client: TestClient, recording_notifier):
        short_code = client.post("/api/shorten", json={"long_url": "https://example.com"}).json()["short_code"]

        client.get(f"/{short_code}", follow_redirects=False)
        client.get(f"/{short_code}", follow_redirects=False)

        assert recording_notifier.sent == [short_code, short_code]

    def test_notification_failure_not_surfaced(self, shortener_app):
        """Analytics being down never changes the redirect answer"""
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with TestClient(shortener_app) as test_client:
            shortener_app.state.notifier = ClickNotifier(
                "http://analytics.test", transport=httpx.MockTransport(refuse)
            )
            short_code = test_client.post(
                "/api/shorten", json={"long_url": "https://example.com"}
            ).json()["short_code"]

            response = test_client.get(f"/{short_code}", follow_redirects=False)

        assert response.status_code == 301
        assert response.headers["location"] == "https://example.com"


class TestServiceEndpoints:

    def test_health(self, client: TestClient):
        data = client.get("/health").json()

        assert data["status"] == "healthy"
        assert data["service"] == "redirect-service"
        assert "timestamp" in data

    def test_root(self, client: TestClient):
        assert client.get("/").status_code == 200


class BrokenLinkService:
    """Link service whose store is unavailable"""

    async def create_short_link(self, long_url: str):
        raise OperationalError("INSERT INTO short_links", {}, Exception("database is locked"))

    async def get_long_url_for_redirect(self, short_code: str):
        raise OperationalError("SELECT short_links.long_url", {}, Exception("database is locked"))


class TestStoreFailures:

    @pytest.fixture
    def broken_client(self, shortener_app, recording_notifier):
        shortener_app.dependency_overrides[get_link_service] = lambda: BrokenLinkService()
        shortener_app.dependency_overrides[get_notifier] = lambda: recording_notifier
        with TestClient(shortener_app, raise_server_exceptions=False) as test_client:
            yield test_client
        shortener_app.dependency_overrides.clear()

    def test_shorten_returns_500(self, broken_client: TestClient):
        response = broken_client.post("/api/shorten", json={"long_url": "https://example.com"})

        assert response.status_code == 500
        assert response.json() == {"detail": "Database error"}

    def test_redirect_returns_500(self, broken_client: TestClient, recording_notifier):
        response = broken_client.get("/abc123", follow_redirects=False)

        assert response.status_code == 500
        assert response.json() == {"detail": "Database error"}
        assert recording_notifier.sent == []
