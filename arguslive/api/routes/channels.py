"""Channel and guide endpoints."""

from datetime import datetime, timedelta

from fastapi import APIRouter, Depends, HTTPException, Query, status

from arguslive.api.dependencies import get_livetv_service, to_http_error
from arguslive.api.models import ChannelResponse, ProgramResponse
from arguslive.core.exceptions import ArgusLiveError
from arguslive.services import ArgusLiveTvService
from arguslive.utilities.tz import ensure_utc, now_utc

router = APIRouter()


@router.get("", response_model=list[ChannelResponse])
def list_channels(service: ArgusLiveTvService = Depends(get_livetv_service)):
    """All television channels."""
    try:
        channels = service.get_channels()
    except ArgusLiveError as e:
        raise to_http_error(e) from e
    return [ChannelResponse.from_info(c) for c in channels]


@router.get("/{channel_id}/programs", response_model=list[ProgramResponse])
def list_programs(
    channel_id: str,
    start: datetime | None = Query(default=None, description="UTC start (default: now)"),
    end: datetime | None = Query(default=None, description="UTC end (default: start + 24h)"),
    service: ArgusLiveTvService = Depends(get_livetv_service),
):
    """Guide entries for a channel."""
    start_utc = ensure_utc(start) if start else now_utc()
    end_utc = ensure_utc(end) if end else start_utc + timedelta(days=1)
    if end_utc <= start_utc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="end must be after start",
        )

    try:
        programs = service.get_programs(channel_id, start_utc, end_utc)
    except ArgusLiveError as e:
        raise to_http_error(e) from e
    return [ProgramResponse.from_info(p) for p in programs]
