import logging
from typing import Optional

import httpx

from metadata_app.schemas.metadata import ExtractedMetadata
from metadata_app.services.extractors import UNABLE_TO_FETCH, extract_metadata

logger = logging.getLogger(__name__)


class MetadataFetcher:
    """
    Downloads a page and runs the extractor chains over it.

    Never raises: any fetch or parse failure yields the
    "unable to fetch" placeholder.
    """

    def __init__(
        self,
        timeout: float = 5.0,
        max_redirects: int = 5,
        user_agent: str = "Mozilla/5.0 (compatible; URLShortenerBot/1.0)",
        title_max_length: int = 200,
        description_max_length: int = 500,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.timeout = timeout
        self.max_redirects = max_redirects
        self.user_agent = user_agent
        self.title_max_length = title_max_length
        self.description_max_length = description_max_length
        self.transport = transport

    async def fetch(self, url: str) -> ExtractedMetadata:
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                follow_redirects=True,
                max_redirects=self.max_redirects,
                headers={"User-Agent": self.user_agent},
                transport=self.transport,
            ) as client:
                response = await client.get(url)
                response.raise_for_status()

            return extract_metadata(
                response.text,
                url,
                title_max_length=self.title_max_length,
                description_max_length=self.description_max_length,
            )
        except Exception as e:
            logger.error("Error fetching metadata for %s: %s", url, e)
            return UNABLE_TO_FETCH.model_copy()
