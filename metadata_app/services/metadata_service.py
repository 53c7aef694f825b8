import logging
from typing import List, Optional

from sqlalchemy.orm import Session
from sqlalchemy.sql import func

from metadata_app.models.page_metadata import PageMetadata
from metadata_app.schemas.metadata import MetadataResult
from metadata_app.services.fetcher import MetadataFetcher

logger = logging.getLogger(__name__)


class MetadataService:
    """Scrape-and-store for page metadata, one row per short code."""

    def __init__(self, db: Session, fetcher: MetadataFetcher):
        self.db = db
        self.fetcher = fetcher

    async def refresh(self, short_code: str, long_url: str) -> MetadataResult:
        """
        Fetch ``long_url`` and overwrite the stored row for ``short_code``.

        Fetch failures are stored as the placeholder result; only store
        errors propagate.
        """
        logger.info("Fetching metadata for: %s", long_url)
        extracted = await self.fetcher.fetch(long_url)

        row = self.db.query(PageMetadata).filter(PageMetadata.short_code == short_code).first()
        if row is None:
            row = PageMetadata(short_code=short_code)
            self.db.add(row)

        row.url = long_url
        row.title = extracted.title
        row.description = extracted.description
        row.favicon_url = extracted.favicon_url
        row.fetched_at = func.now()

        self.db.commit()
        logger.info("✅ Metadata stored for %s: %s", short_code, extracted.title)

        return MetadataResult(
            short_code=short_code,
            url=long_url,
            title=extracted.title,
            description=extracted.description,
            favicon_url=extracted.favicon_url,
        )

    async def get(self, short_code: str) -> Optional[PageMetadata]:
        return self.db.query(PageMetadata).filter(PageMetadata.short_code == short_code).first()

    async def list_all(self) -> List[PageMetadata]:
        return (
            self.db.query(PageMetadata)
            .order_by(PageMetadata.fetched_at.desc(), PageMetadata.id.desc())
            .all()
        )
