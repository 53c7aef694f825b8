from fastapi import APIRouter, Depends, HTTPException, status

from shortener_app.config import Settings
from shortener_app.dependencies import get_link_service, get_settings
from shortener_app.exceptions import ShortCodeExhaustedError
from shortener_app.schemas.short_link import ShortenRequest, ShortenResponse
from shortener_app.services.link_service import LinkService

router = APIRouter(prefix="/api", tags=["links"])


@router.post("/shorten", response_model=ShortenResponse)
async def create_short_url(
    payload: ShortenRequest,
    link_service: LinkService = Depends(get_link_service),
    settings: Settings = Depends(get_settings)
):
    """Create a new short URL"""
    try:
        link = await link_service.create_short_link(payload.long_url)
    except ShortCodeExhaustedError as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=str(e)
        )

    return ShortenResponse(
        short_code=link.short_code,
        short_url=f"{settings.base_url.rstrip('/')}/{link.short_code}",
        long_url=link.long_url,
    )
