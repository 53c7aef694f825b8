import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from common import Database, configure_logging, register_exception_handlers
from shortener_app.api import links, redirect
from shortener_app.cache.factory import CacheFactory
from shortener_app.config import Settings, settings as default_settings
from shortener_app.database.connection import Base
from shortener_app.services.click_notifier import ClickNotifier
from shortener_app.services.short_code_strategies import RandomShortCodeStrategy

# Import models to ensure they're registered with Base
from shortener_app.models import ShortLink  # noqa: F401

logger = logging.getLogger("shortener_app")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the redirect service with its own store, cache and notifier."""
    settings = settings or default_settings
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.database.create_tables(Base)
        logger.info("🚀 %s started (analytics at %s)", settings.app_name, settings.analytics_base_url)
        yield
        app.state.database.dispose()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Allocates short codes and redirects them to their targets",
        debug=settings.debug,
        lifespan=lifespan
    )

    app.state.settings = settings
    app.state.database = Database(settings.database_url)
    app.state.cache = CacheFactory.create(settings)
    app.state.short_code_strategy = RandomShortCodeStrategy(length=settings.short_code_length)
    app.state.notifier = ClickNotifier(settings.analytics_base_url, timeout=settings.notify_timeout)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )
    register_exception_handlers(app)

    @app.get("/")
    def read_root():
        """Root endpoint with API information"""
        return {
            "message": f"Welcome to {settings.app_name}",
            "version": settings.app_version,
            "docs": "/docs",
        }

    @app.get("/health")
    def health_check():
        """Health check endpoint"""
        return {
            "status": "healthy",
            "service": "redirect-service",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    ######## Include routers (redirect last: it catches every /{short_code})
    app.include_router(links.router)
    app.include_router(redirect.router)

    return app


app = create_app()
