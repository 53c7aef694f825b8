"""
FastAPI dependencies for the redirect service.

Everything long-lived (store, cache, code strategy, notifier) is built
once by ``create_app()`` and kept on ``app.state``; these functions hand
it to the routes. Tests replace any of them via ``app.dependency_overrides``.
"""

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from shortener_app.cache.strategies import CacheStrategy
from shortener_app.config import Settings
from shortener_app.database.connection import get_db
from shortener_app.services.click_notifier import ClickNotifier
from shortener_app.services.link_service import LinkService
from shortener_app.services.short_code_strategies import ShortCodeStrategy


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_cache(request: Request) -> CacheStrategy:
    return request.app.state.cache


def get_short_code_strategy(request: Request) -> ShortCodeStrategy:
    return request.app.state.short_code_strategy


def get_notifier(request: Request) -> ClickNotifier:
    return request.app.state.notifier


def get_link_service(
    db: Session = Depends(get_db),
    cache: CacheStrategy = Depends(get_cache),
    strategy: ShortCodeStrategy = Depends(get_short_code_strategy),
    settings: Settings = Depends(get_settings)
) -> LinkService:
    """
    Get LinkService with all dependencies injected.

    Routes depend on the service; the service depends on
    infrastructure (db, cache, strategy).
    """
    return LinkService(
        db=db,
        strategy=strategy,
        cache=cache,
        max_retries=settings.max_retries,
        cache_ttl=settings.cache_ttl
    )
