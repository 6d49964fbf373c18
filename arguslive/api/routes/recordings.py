"""Recording endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status

from arguslive.api.dependencies import get_livetv_service, to_http_error
from arguslive.api.models import RecordingResponse
from arguslive.core.exceptions import ArgusLiveError
from arguslive.services import ArgusLiveTvService

router = APIRouter()


@router.get("", response_model=list[RecordingResponse])
def list_recordings(service: ArgusLiveTvService = Depends(get_livetv_service)):
    """All television recordings."""
    try:
        recordings = service.get_recordings()
    except ArgusLiveError as e:
        raise to_http_error(e) from e
    return [RecordingResponse.from_info(r) for r in recordings]


@router.delete("/{recording_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_recording(
    recording_id: str,
    service: ArgusLiveTvService = Depends(get_livetv_service),
) -> None:
    """Delete a recording and its file."""
    try:
        deleted = service.delete_recording(recording_id)
    except ArgusLiveError as e:
        raise to_http_error(e) from e

    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Could not delete recording {recording_id}",
        )
