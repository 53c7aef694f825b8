"""
Tests for short code generation and allocation.
"""
import asyncio
import re

import pytest

from conftest import SequenceStrategy
from shortener_app.cache.strategies import InMemoryCache
from shortener_app.exceptions import ShortCodeExhaustedError
from shortener_app.models.short_link import ShortLink
from shortener_app.services.link_service import LinkService
from shortener_app.services.short_code_strategies import (
    URL_SAFE_ALPHABET,
    RandomShortCodeStrategy,
)

CODE_PATTERN = re.compile(r"^[A-Za-z0-9_-]{6}$")


class TestRandomStrategy:
    """Test the random URL-safe strategy"""

    def test_generates_fixed_length(self):
        strategy = RandomShortCodeStrategy(length=6)

        for _ in range(200):
            assert len(strategy.generate()) == 6

    def test_uses_url_safe_alphabet_only(self):
        strategy = RandomShortCodeStrategy(length=6)

        for _ in range(200):
            code = strategy.generate()
            assert CODE_PATTERN.match(code)
            assert set(code) <= set(URL_SAFE_ALPHABET)

    def test_other_lengths(self):
        assert len(RandomShortCodeStrategy(length=1).generate()) == 1
        assert len(RandomShortCodeStrategy(length=12).generate()) == 12

    def test_draws_differ(self):
        """64^6 codes: 100 draws should essentially never repeat"""
        strategy = RandomShortCodeStrategy(length=6)

        codes = {strategy.generate() for _ in range(100)}

        assert len(codes) == 100

    def test_rejects_non_positive_length(self):
        with pytest.raises(ValueError):
            RandomShortCodeStrategy(length=0)


class TestLinkServiceAllocation:
    """Test collision handling in LinkService"""

    def test_creates_link(self, db_session):
        service = LinkService(db_session, RandomShortCodeStrategy())

        link = asyncio.run(service.create_short_link("https://example.com"))

        assert CODE_PATTERN.match(link.short_code)
        assert link.long_url == "https://example.com"
        assert link.created_at is not None

    def test_same_url_twice_gets_two_codes(self, db_session):
        service = LinkService(db_session, RandomShortCodeStrategy())

        first = asyncio.run(service.create_short_link("https://example.com"))
        second = asyncio.run(service.create_short_link("https://example.com"))

        assert first.short_code != second.short_code

    def test_redraws_when_code_exists(self, db_session):
        """A pre-existing code is never handed out again"""
        db_session.add(ShortLink(short_code="AAAAAA", long_url="https://taken.example"))
        db_session.commit()

        strategy = SequenceStrategy(["AAAAAA", "BBBBBB"])
        service = LinkService(db_session, strategy)

        link = asyncio.run(service.create_short_link("https://example.com"))

        assert link.short_code == "BBBBBB"
        assert strategy.calls == 2

    def test_gives_up_after_max_retries(self, db_session):
        db_session.add(ShortLink(short_code="AAAAAA", long_url="https://taken.example"))
        db_session.commit()

        strategy = SequenceStrategy(["AAAAAA"])
        service = LinkService(db_session, strategy, max_retries=3)

        with pytest.raises(ShortCodeExhaustedError) as exc_info:
            asyncio.run(service.create_short_link("https://example.com"))

        assert exc_info.value.attempts == 3
        assert strategy.calls == 3

    def test_unique_constraint_backs_up_existence_check(self, db_session, monkeypatch):
        """Even if the read check misses a collision, the insert does not duplicate"""
        db_session.add(ShortLink(short_code="AAAAAA", long_url="https://taken.example"))
        db_session.commit()

        service = LinkService(db_session, SequenceStrategy(["AAAAAA", "CCCCCC"]))
        monkeypatch.setattr(service, "_code_exists", lambda short_code: False)

        link = asyncio.run(service.create_short_link("https://example.com"))

        assert link.short_code == "CCCCCC"
        assert db_session.query(ShortLink).filter(ShortLink.short_code == "AAAAAA").count() == 1
        taken = db_session.query(ShortLink).filter(ShortLink.short_code == "AAAAAA").one()
        assert taken.long_url == "https://taken.example"


class TestLinkServiceLookup:
    """Test redirect lookups through the cache"""

    def test_lookup_known_code(self, db_session):
        service = LinkService(db_session, RandomShortCodeStrategy())
        link = asyncio.run(service.create_short_link("https://example.com/page"))

        assert asyncio.run(service.get_long_url_for_redirect(link.short_code)) == "https://example.com/page"

    def test_lookup_unknown_code(self, db_session):
        service = LinkService(db_session, RandomShortCodeStrategy())

        assert asyncio.run(service.get_long_url_for_redirect("nope00")) is None

    def test_lookup_populates_cache(self, db_session):
        db_session.add(ShortLink(short_code="XYZ123", long_url="https://cached.example"))
        db_session.commit()
        cache = InMemoryCache()
        service = LinkService(db_session, RandomShortCodeStrategy(), cache=cache)

        asyncio.run(service.get_long_url_for_redirect("XYZ123"))

        assert asyncio.run(cache.get("link:XYZ123")) == "https://cached.example"

    def test_cache_hit_skips_database(self, db_session):
        cache = InMemoryCache()
        asyncio.run(cache.set("link:ONLYC1", "https://from-cache.example"))
        service = LinkService(db_session, RandomShortCodeStrategy(), cache=cache)

        assert asyncio.run(service.get_long_url_for_redirect("ONLYC1")) == "https://from-cache.example"
