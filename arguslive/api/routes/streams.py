"""Live and recorded stream endpoints."""

from fastapi import APIRouter, Depends, status

from arguslive.api.dependencies import get_livetv_service, to_http_error
from arguslive.api.models import StreamSessionResponse
from arguslive.core.exceptions import ArgusLiveError
from arguslive.services import ArgusLiveTvService

router = APIRouter()


@router.post("/channels/{channel_id}", response_model=StreamSessionResponse)
def open_channel_stream(
    channel_id: str,
    service: ArgusLiveTvService = Depends(get_livetv_service),
):
    """Tune a channel and return its RTSP URL."""
    try:
        session = service.get_channel_stream(channel_id)
    except ArgusLiveError as e:
        raise to_http_error(e) from e
    return StreamSessionResponse.from_session(session)


@router.post("/recordings/{recording_id}", response_model=StreamSessionResponse)
def open_recording_stream(
    recording_id: str,
    service: ArgusLiveTvService = Depends(get_livetv_service),
):
    """Resolve a recording to its file path."""
    try:
        session = service.get_recording_stream(recording_id)
    except ArgusLiveError as e:
        raise to_http_error(e) from e
    return StreamSessionResponse.from_session(session)


@router.delete("/{stream_id}", status_code=status.HTTP_204_NO_CONTENT)
def close_stream(
    stream_id: str,
    service: ArgusLiveTvService = Depends(get_livetv_service),
) -> None:
    """Stop the live stream of a channel."""
    try:
        service.close_live_stream(stream_id)
    except ArgusLiveError as e:
        raise to_http_error(e) from e
