"""Backend status endpoint."""

from fastapi import APIRouter, Depends

from arguslive.api.dependencies import get_livetv_service, to_http_error
from arguslive.api.models import StatusResponse
from arguslive.core.exceptions import ArgusLiveError
from arguslive.services import ArgusLiveTvService

router = APIRouter()


@router.get("/status", response_model=StatusResponse)
def get_status(service: ArgusLiveTvService = Depends(get_livetv_service)):
    """Server version, update availability and handshake state."""
    try:
        info = service.get_status_info()
    except ArgusLiveError as e:
        raise to_http_error(e) from e

    return StatusResponse(
        name=service.name,
        home_page_url=service.home_page_url,
        status=info.status,
        version=info.version,
        has_update_available=info.has_update_available,
        api_version=service.gate.api_version,
    )
