from fastapi import APIRouter, Depends, HTTPException, status

from metadata_app.dependencies import get_metadata_service
from metadata_app.schemas.metadata import (
    MetadataRequest,
    MetadataResult,
    PageMetadataList,
    PageMetadataResponse,
)
from metadata_app.services.metadata_service import MetadataService

router = APIRouter(prefix="/api/metadata", tags=["metadata"])


@router.post("", response_model=MetadataResult)
async def fetch_metadata(
    payload: MetadataRequest,
    metadata_service: MetadataService = Depends(get_metadata_service)
):
    """Scrape the URL and store the result for the short code.

    Always 200 unless the store fails: an unreachable page is stored
    with placeholder values.
    """
    return await metadata_service.refresh(payload.short_code, payload.long_url)


@router.get("", response_model=PageMetadataList)
async def list_metadata(metadata_service: MetadataService = Depends(get_metadata_service)):
    rows = await metadata_service.list_all()
    return PageMetadataList(
        metadata=[PageMetadataResponse.model_validate(row) for row in rows],
        count=len(rows),
    )


@router.get("/{short_code}", response_model=PageMetadataResponse)
async def get_metadata(
    short_code: str,
    metadata_service: MetadataService = Depends(get_metadata_service)
):
    row = await metadata_service.get(short_code)
    if not row:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Metadata not found"
        )
    return row
