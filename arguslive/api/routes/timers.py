"""Timer (single recording) endpoints."""

from fastapi import APIRouter, Depends, status

from arguslive.api.dependencies import get_livetv_service, to_http_error
from arguslive.api.models import SeriesTimerResponse, TimerRequest, TimerResponse
from arguslive.core.exceptions import ArgusLiveError
from arguslive.services import ArgusLiveTvService

router = APIRouter()


@router.get("", response_model=list[TimerResponse])
def list_timers(service: ArgusLiveTvService = Depends(get_livetv_service)):
    """Upcoming scheduled recordings."""
    try:
        timers = service.get_timers()
    except ArgusLiveError as e:
        raise to_http_error(e) from e
    return [TimerResponse.from_info(t) for t in timers]


@router.get("/defaults", response_model=SeriesTimerResponse)
def get_timer_defaults(service: ArgusLiveTvService = Depends(get_livetv_service)):
    """Default padding for new timers."""
    try:
        defaults = service.get_new_timer_defaults()
    except ArgusLiveError as e:
        raise to_http_error(e) from e
    return SeriesTimerResponse.from_info(defaults)


@router.post("", status_code=status.HTTP_201_CREATED)
def create_timer(
    request: TimerRequest,
    service: ArgusLiveTvService = Depends(get_livetv_service),
) -> dict:
    """Schedule a single recording."""
    try:
        service.create_timer(request.to_info())
    except ArgusLiveError as e:
        raise to_http_error(e) from e
    return {"success": True}


@router.put("/{timer_id}")
def update_timer(
    timer_id: str,
    request: TimerRequest,
    service: ArgusLiveTvService = Depends(get_livetv_service),
) -> dict:
    """Replace a single recording's schedule."""
    try:
        service.update_timer(request.to_info(timer_id))
    except ArgusLiveError as e:
        raise to_http_error(e) from e
    return {"success": True}


@router.delete("/{timer_id}", status_code=status.HTTP_204_NO_CONTENT)
def cancel_timer(
    timer_id: str,
    service: ArgusLiveTvService = Depends(get_livetv_service),
) -> None:
    """Cancel a scheduled recording."""
    try:
        service.cancel_timer(timer_id)
    except ArgusLiveError as e:
        raise to_http_error(e) from e
