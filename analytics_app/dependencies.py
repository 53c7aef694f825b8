"""
FastAPI dependencies for the analytics service.

Peer clients are built once by ``create_app()``; tests override
get_redirect_client / get_metadata_client to simulate the peers.
"""

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from analytics_app.clients.peers import MetadataServiceClient, RedirectServiceClient
from analytics_app.config import Settings
from analytics_app.database.connection import get_db
from analytics_app.services.click_aggregator import ClickAggregator
from analytics_app.services.orchestrator import CreationOrchestrator
from analytics_app.services.stats_service import StatsService


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_redirect_client(request: Request) -> RedirectServiceClient:
    return request.app.state.redirect_client


def get_metadata_client(request: Request) -> MetadataServiceClient:
    return request.app.state.metadata_client


def get_orchestrator(
    db: Session = Depends(get_db),
    redirect_client: RedirectServiceClient = Depends(get_redirect_client),
    metadata_client: MetadataServiceClient = Depends(get_metadata_client)
) -> CreationOrchestrator:
    return CreationOrchestrator(
        db=db,
        redirect_client=redirect_client,
        metadata_client=metadata_client
    )


def get_click_aggregator(db: Session = Depends(get_db)) -> ClickAggregator:
    return ClickAggregator(db)


def get_stats_service(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings)
) -> StatsService:
    return StatsService(
        db=db,
        top_urls_limit=settings.top_urls_limit,
        recent_clicks_limit=settings.recent_clicks_limit,
        days=settings.stats_days
    )
