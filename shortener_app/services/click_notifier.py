"""
Fire-and-forget click notifications to the Analytics Service.

Delivery is at-most-once: a notification that fails (timeout, refused
connection, non-2xx answer) is logged and dropped. Nothing is retried or
queued, and the redirect that triggered it never sees the outcome.
"""

import logging
from datetime import datetime
from typing import Optional

import httpx

from shortener_app.schemas.events import ClickEvent

logger = logging.getLogger(__name__)


class ClickNotifier:
    """Posts ClickEvents to ``{analytics_base_url}/api/events``."""

    def __init__(
        self,
        analytics_base_url: str,
        timeout: float = 2.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Args:
            analytics_base_url: Root URL of the Analytics Service
            timeout: Client-side timeout in seconds
            transport: Optional httpx transport (tests route it in-process)
        """
        self.events_url = f"{analytics_base_url.rstrip('/')}/api/events"
        self.timeout = timeout
        self.transport = transport

    async def notify(self, short_code: str, clicked_at: Optional[datetime] = None) -> bool:
        """
        Send one click event. Never raises.

        Returns:
            True if the Analytics Service answered 2xx, False otherwise
        """
        event = ClickEvent(short_code=short_code)
        if clicked_at is not None:
            event.clicked_at = clicked_at

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(self.events_url, json=event.to_payload())
        except httpx.TimeoutException:
            logger.warning("Click event for %s timed out after %.1fs", short_code, self.timeout)
            return False
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning("Error sending click event for %s: %s", short_code, e)
            return False

        if not response.is_success:
            logger.warning(
                "Analytics service returned status %d for click on %s",
                response.status_code, short_code
            )
            return False

        logger.info("Click event sent for short code: %s", short_code)
        return True
