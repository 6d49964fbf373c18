"""Health check endpoint."""

from fastapi import APIRouter

from arguslive.config import VERSION

router = APIRouter()


@router.get("/health")
def health_check() -> dict:
    """Liveness of this process (does not contact the ARGUS TV server)."""
    return {"status": "healthy", "version": VERSION}
