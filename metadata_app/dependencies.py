"""
FastAPI dependencies for the metadata service.
"""

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from metadata_app.database.connection import get_db
from metadata_app.services.fetcher import MetadataFetcher
from metadata_app.services.metadata_service import MetadataService


def get_fetcher(request: Request) -> MetadataFetcher:
    return request.app.state.fetcher


def get_metadata_service(
    db: Session = Depends(get_db),
    fetcher: MetadataFetcher = Depends(get_fetcher)
) -> MetadataService:
    return MetadataService(db=db, fetcher=fetcher)
