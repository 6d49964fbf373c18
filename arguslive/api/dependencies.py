"""FastAPI dependencies and error mapping."""

from fastapi import HTTPException, status

from arguslive.core.exceptions import (
    ArgusLiveError,
    ConfigurationError,
    OperationCancelled,
    SchedulingConflict,
    StreamUnavailable,
    UnsupportedOperation,
)
from arguslive.services import ArgusLiveTvService
from arguslive.services import get_livetv_service as _get_global_service

_STATUS_BY_ERROR: list[tuple[type[ArgusLiveError], int]] = [
    (ConfigurationError, status.HTTP_503_SERVICE_UNAVAILABLE),
    (SchedulingConflict, status.HTTP_409_CONFLICT),
    (StreamUnavailable, status.HTTP_404_NOT_FOUND),
    (UnsupportedOperation, status.HTTP_501_NOT_IMPLEMENTED),
    (OperationCancelled, status.HTTP_503_SERVICE_UNAVAILABLE),
]


def get_livetv_service() -> ArgusLiveTvService:
    """Dependency returning the process-wide live TV service."""
    try:
        return _get_global_service()
    except RuntimeError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e)) from e


def to_http_error(error: ArgusLiveError) -> HTTPException:
    """Map an adapter error to an HTTP error (unknown ones become 502)."""
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return HTTPException(status_code=status_code, detail=str(error))
    return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(error))
