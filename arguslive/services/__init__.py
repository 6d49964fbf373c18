"""Service layer.

This layer provides clean APIs for live TV operations, hiding the consumer
layer implementation details from the API layer.

Layer hierarchy:
    API → Services → Consumers → ARGUS TV client
"""

import threading

from arguslive.argus.factory import ArgusFactory
from arguslive.services.livetv_service import ArgusLiveTvService
from arguslive.services.schedule_service import ScheduleService
from arguslive.services.stream_service import StreamService

_livetv_service: ArgusLiveTvService | None = None
_livetv_lock = threading.Lock()


def init_livetv_service(
    factory: ArgusFactory | None = None,
    start_keepalive: bool = True,
) -> ArgusLiveTvService:
    """Initialize the global live TV service (replacing any previous one)."""
    global _livetv_service

    with _livetv_lock:
        if _livetv_service is not None:
            _livetv_service.close()
        _livetv_service = ArgusLiveTvService(factory=factory, start_keepalive=start_keepalive)
        return _livetv_service


def get_livetv_service() -> ArgusLiveTvService:
    """Get the global live TV service.

    Raises RuntimeError if not initialized.
    """
    if _livetv_service is None:
        raise RuntimeError("Live TV service not initialized. Call init_livetv_service() first.")
    return _livetv_service


def close_livetv_service() -> None:
    """Stop the keep-alive loop and drop the global service."""
    global _livetv_service

    with _livetv_lock:
        if _livetv_service is not None:
            _livetv_service.close()
            _livetv_service = None


__all__ = [
    "ArgusLiveTvService",
    "ScheduleService",
    "StreamService",
    "close_livetv_service",
    "get_livetv_service",
    "init_livetv_service",
]
