import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from common import Database, configure_logging, register_exception_handlers
from metadata_app.api import metadata
from metadata_app.config import Settings, settings as default_settings
from metadata_app.database.connection import Base
from metadata_app.services.fetcher import MetadataFetcher

# Import models to ensure they're registered with Base
from metadata_app.models import PageMetadata  # noqa: F401

logger = logging.getLogger("metadata_app")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the metadata service with its own store and page fetcher."""
    settings = settings or default_settings
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.database.create_tables(Base)
        logger.info("🚀 %s running on port %d", settings.app_name, settings.port)
        yield
        app.state.database.dispose()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Fetches and stores title, description and favicon of shortened pages",
        debug=settings.debug,
        lifespan=lifespan
    )

    app.state.settings = settings
    app.state.database = Database(settings.database_url)
    app.state.fetcher = MetadataFetcher(
        timeout=settings.fetch_timeout,
        max_redirects=settings.max_redirects,
        user_agent=settings.user_agent,
        title_max_length=settings.title_max_length,
        description_max_length=settings.description_max_length,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )
    register_exception_handlers(app)

    @app.get("/health")
    def health_check():
        """Health check endpoint"""
        return {
            "status": "healthy",
            "service": "metadata-service",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    ######## Include routers
    app.include_router(metadata.router)

    return app


app = create_app()
