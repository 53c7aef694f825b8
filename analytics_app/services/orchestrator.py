import logging

from sqlalchemy.orm import Session

from analytics_app.clients.peers import MetadataServiceClient, RedirectServiceClient
from analytics_app.exceptions import MetadataServiceError
from analytics_app.models.url_record import RecordStatus, UrlRecord, utcnow

logger = logging.getLogger(__name__)


class CreationOrchestrator:
    """
    Dashboard "create" flow.

    1. Redirect service allocates the short code (failure is fatal)
    2. Metadata service enriches it (failure degrades to status=failed)
    3. The combined result is upserted into url_records
    """

    def __init__(
        self,
        db: Session,
        redirect_client: RedirectServiceClient,
        metadata_client: MetadataServiceClient
    ):
        self.db = db
        self.redirect_client = redirect_client
        self.metadata_client = metadata_client

    async def create(self, long_url: str) -> UrlRecord:
        """
        Raises:
            RedirectServiceError: the redirect service could not create the link
        """
        shortened = await self.redirect_client.shorten(long_url)
        short_code = shortened.short_code

        try:
            metadata = await self.metadata_client.fetch_metadata(short_code, long_url)
        except MetadataServiceError as e:
            logger.warning("Metadata enrichment failed for %s: %s", short_code, e)
            metadata = None

        # A click may already have created a minimal record for this code
        record = self.db.get(UrlRecord, short_code)
        if record is None:
            record = UrlRecord(
                short_code=short_code,
                total_clicks=0,
                first_seen=utcnow(),
            )
            self.db.add(record)

        record.long_url = long_url
        if metadata is not None:
            record.title = metadata.title
            record.description = metadata.description
            record.favicon_url = metadata.favicon_url
            record.status = RecordStatus.SUCCESS.value
        else:
            record.status = RecordStatus.FAILED.value

        self.db.commit()
        self.db.refresh(record)

        logger.info("Created %s -> %s (metadata: %s)", short_code, long_url, record.status)
        return record
