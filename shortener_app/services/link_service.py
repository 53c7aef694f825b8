import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from shortener_app.cache.strategies import CacheStrategy
from shortener_app.exceptions import ShortCodeExhaustedError
from shortener_app.models.short_link import ShortLink
from shortener_app.services.short_code_strategies import ShortCodeStrategy

logger = logging.getLogger(__name__)


class LinkService:
    """
    Short link allocation and lookup.

    Dependencies are injected (session, cache, code strategy) so tests
    can drive collisions with a fixed sequence of codes.
    """

    def __init__(
        self,
        db: Session,
        strategy: ShortCodeStrategy,
        cache: Optional[CacheStrategy] = None,
        max_retries: int = 10,
        cache_ttl: int = 3600
    ):
        """
        Args:
            db: Database session
            strategy: Draws candidate short codes
            cache: Cache for redirect lookups (optional)
            max_retries: Upper bound on draws before giving up
            cache_ttl: Seconds a cached target stays valid
        """
        self.db = db
        self.strategy = strategy
        self.cache = cache
        self.max_retries = max_retries
        self.cache_ttl = cache_ttl

    async def create_short_link(self, long_url: str) -> ShortLink:
        """Allocate a unique short code for ``long_url`` and persist it.

        Every call creates a new mapping, even for a URL that was
        shortened before.

        Process:
        1. Draw a code from the strategy
        2. Skip it if the store already has it
        3. Insert; a unique-constraint violation (concurrent insert of the
           same code) counts as a collision too
        4. Cache the mapping

        Raises:
            ShortCodeExhaustedError: all ``max_retries`` draws collided
            SQLAlchemyError: the store failed
        """
        for attempt in range(1, self.max_retries + 1):
            short_code = self.strategy.generate()

            if self._code_exists(short_code):
                logger.warning(
                    "Short code collision on %s (attempt %d/%d)",
                    short_code, attempt, self.max_retries
                )
                continue

            link = ShortLink(short_code=short_code, long_url=long_url)
            self.db.add(link)
            try:
                self.db.commit()
            except IntegrityError:
                self.db.rollback()
                logger.warning(
                    "Short code %s taken by a concurrent insert (attempt %d/%d)",
                    short_code, attempt, self.max_retries
                )
                continue

            self.db.refresh(link)
            if self.cache:
                await self.cache.set(self._cache_key(short_code), long_url, ttl=self.cache_ttl)

            logger.info("Created short URL: %s -> %s", short_code, long_url)
            return link

        raise ShortCodeExhaustedError(self.max_retries)

    async def get_long_url_for_redirect(self, short_code: str) -> Optional[str]:
        """
        Resolve a short code using the cache-aside pattern.

        Returns None when the code is unknown.
        """
        cache_key = self._cache_key(short_code)

        if self.cache:
            cached_url = await self.cache.get(cache_key)
            if cached_url:
                return cached_url

        link = self.db.query(ShortLink).filter(ShortLink.short_code == short_code).first()
        if not link:
            return None

        if self.cache:
            await self.cache.set(cache_key, link.long_url, ttl=self.cache_ttl)

        return link.long_url

    def _code_exists(self, short_code: str) -> bool:
        return self.db.query(ShortLink.id).filter(ShortLink.short_code == short_code).first() is not None

    @staticmethod
    def _cache_key(short_code: str) -> str:
        return f"link:{short_code}"
