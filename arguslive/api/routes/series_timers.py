"""Series timer (recurring recording) endpoints."""

from fastapi import APIRouter, Depends, status

from arguslive.api.dependencies import get_livetv_service, to_http_error
from arguslive.api.models import SeriesTimerRequest, SeriesTimerResponse
from arguslive.core.exceptions import ArgusLiveError
from arguslive.services import ArgusLiveTvService

router = APIRouter()


@router.get("", response_model=list[SeriesTimerResponse])
def list_series_timers(service: ArgusLiveTvService = Depends(get_livetv_service)):
    """Recurring schedules that have upcoming recordings."""
    try:
        series = service.get_series_timers()
    except ArgusLiveError as e:
        raise to_http_error(e) from e
    return [SeriesTimerResponse.from_info(s) for s in series]


@router.post("", status_code=status.HTTP_201_CREATED)
def create_series_timer(
    request: SeriesTimerRequest,
    service: ArgusLiveTvService = Depends(get_livetv_service),
) -> dict:
    """Schedule a recurring recording."""
    try:
        service.create_series_timer(request.to_info())
    except ArgusLiveError as e:
        raise to_http_error(e) from e
    return {"success": True}


@router.put("/{timer_id}")
def update_series_timer(
    timer_id: str,
    request: SeriesTimerRequest,
    service: ArgusLiveTvService = Depends(get_livetv_service),
) -> dict:
    """Replace a recurring recording's schedule."""
    try:
        service.update_series_timer(request.to_info(timer_id))
    except ArgusLiveError as e:
        raise to_http_error(e) from e
    return {"success": True}


@router.delete("/{timer_id}", status_code=status.HTTP_204_NO_CONTENT)
def cancel_series_timer(
    timer_id: str,
    service: ArgusLiveTvService = Depends(get_livetv_service),
) -> None:
    """Cancel a recurring recording."""
    try:
        service.cancel_series_timer(timer_id)
    except ArgusLiveError as e:
        raise to_http_error(e) from e
