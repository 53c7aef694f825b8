from fastapi import APIRouter, Depends, Form, HTTPException, status

from analytics_app.dependencies import get_orchestrator, get_stats_service
from analytics_app.exceptions import RedirectServiceError
from analytics_app.schemas.analytics import StatsResponse, UrlRecordResponse
from analytics_app.services.orchestrator import CreationOrchestrator
from analytics_app.services.stats_service import StatsService

router = APIRouter(tags=["dashboard"])


@router.post("/create", response_model=UrlRecordResponse, status_code=status.HTTP_201_CREATED)
async def create_url(
    long_url: str = Form(..., min_length=1),
    orchestrator: CreationOrchestrator = Depends(get_orchestrator)
):
    """Shorten a URL through the redirect service, then enrich it"""
    try:
        return await orchestrator.create(long_url.strip())
    except RedirectServiceError as e:
        if e.is_client_error:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Invalid URL: {e}"
            )
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Could not create short URL: {e}"
        )


@router.get("/api/stats", response_model=StatsResponse)
async def get_stats(stats_service: StatsService = Depends(get_stats_service)):
    """Aggregate numbers for the dashboard"""
    return await stats_service.get_stats()


@router.get("/api/urls/{short_code}", response_model=UrlRecordResponse)
async def get_url_record(
    short_code: str,
    stats_service: StatsService = Depends(get_stats_service)
):
    record = await stats_service.get_record(short_code)
    if not record:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Short URL not found"
        )
    return record
