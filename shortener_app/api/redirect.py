from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, status
from fastapi.responses import RedirectResponse

from shortener_app.dependencies import get_link_service, get_notifier
from shortener_app.services.click_notifier import ClickNotifier
from shortener_app.services.link_service import LinkService

router = APIRouter(tags=["redirect"])


@router.get("/{short_code}")
async def redirect_to_long_url(
    short_code: str,
    background_tasks: BackgroundTasks,
    link_service: LinkService = Depends(get_link_service),
    notifier: ClickNotifier = Depends(get_notifier)
):
    """
    Redirect to the original URL.

    Flow:
    1. Resolve the target (cache first, then database)
    2. Schedule the click notification as a background task
    3. Answer 301 immediately; the notification runs after the response
       is sent and its outcome is only logged
    """
    long_url = await link_service.get_long_url_for_redirect(short_code)

    if not long_url:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Short URL not found"
        )

    background_tasks.add_task(notifier.notify, short_code)

    return RedirectResponse(url=long_url, status_code=status.HTTP_301_MOVED_PERMANENTLY)
