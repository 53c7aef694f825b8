"""
Clients for the redirect and metadata services.

Each call is a single attempt with a client-side timeout; any failure is
raised as an UpstreamServiceError subclass and the caller decides whether
it is fatal.
"""

from typing import Optional, Type

import httpx
from pydantic import ValidationError

from analytics_app.exceptions import MetadataServiceError, RedirectServiceError, UpstreamServiceError
from analytics_app.schemas.upstream import PageMetadataResult, ShortenResult


class PeerServiceClient:
    """Shared plumbing: one POST, JSON in and out, no retries."""

    error_class: Type[UpstreamServiceError] = UpstreamServiceError

    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    async def _post_json(self, path: str, payload: dict) -> dict:
        url = f"{self.base_url}{path}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(url, json=payload)
        except httpx.TimeoutException:
            raise self.error_class(f"timed out after {self.timeout}s calling {url}")
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise self.error_class(f"could not reach {url}: {e}")

        if not response.is_success:
            raise self.error_class(
                f"{url} answered {response.status_code}: {self._detail(response)}",
                status_code=response.status_code
            )

        try:
            return response.json()
        except ValueError:
            raise self.error_class(f"{url} returned a non-JSON body")

    @staticmethod
    def _detail(response: httpx.Response) -> str:
        try:
            return str(response.json().get("detail", response.reason_phrase))
        except (ValueError, AttributeError):
            return response.reason_phrase


class RedirectServiceClient(PeerServiceClient):
    error_class = RedirectServiceError

    async def shorten(self, long_url: str) -> ShortenResult:
        """Ask the redirect service to allocate a short code"""
        body = await self._post_json("/api/shorten", {"long_url": long_url})
        try:
            return ShortenResult.model_validate(body)
        except ValidationError:
            raise RedirectServiceError("unexpected response body from /api/shorten")


class MetadataServiceClient(PeerServiceClient):
    error_class = MetadataServiceError

    async def fetch_metadata(self, short_code: str, long_url: str) -> PageMetadataResult:
        """Ask the metadata service to scrape and store the page's metadata"""
        body = await self._post_json(
            "/api/metadata",
            {"short_code": short_code, "long_url": long_url}
        )
        try:
            return PageMetadataResult.model_validate(body)
        except ValidationError:
            raise MetadataServiceError("unexpected response body from /api/metadata")
