import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from analytics_app.api import dashboard, events
from analytics_app.clients.peers import MetadataServiceClient, RedirectServiceClient
from analytics_app.config import Settings, settings as default_settings
from analytics_app.database.connection import Base
from common import Database, configure_logging, register_exception_handlers

# Import models to ensure they're registered with Base
from analytics_app.models import ClickEvent, UrlRecord  # noqa: F401

logger = logging.getLogger("analytics_app")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the analytics service with its own store and peer clients."""
    settings = settings or default_settings
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.database.create_tables(Base)
        logger.info(
            "🚀 %s started (redirect at %s, metadata at %s)",
            settings.app_name, settings.shortener_base_url, settings.metadata_base_url
        )
        yield
        app.state.database.dispose()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Click analytics and dashboard API for the URL shortener",
        debug=settings.debug,
        lifespan=lifespan
    )

    app.state.settings = settings
    app.state.database = Database(settings.database_url)
    app.state.redirect_client = RedirectServiceClient(
        settings.shortener_base_url, timeout=settings.upstream_timeout
    )
    app.state.metadata_client = MetadataServiceClient(
        settings.metadata_base_url, timeout=settings.upstream_timeout
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )
    register_exception_handlers(app)

    @app.get("/")
    def read_root():
        """Dashboard entry point; the HTML view is served elsewhere"""
        return {
            "message": f"Welcome to {settings.app_name}",
            "version": settings.app_version,
            "stats": "/api/stats",
            "create": "/create",
        }

    @app.get("/health")
    def health_check():
        """Health check endpoint"""
        return {
            "status": "healthy",
            "service": "analytics-service",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    ######## Include routers
    app.include_router(events.router)
    app.include_router(dashboard.router)

    return app


app = create_app()
