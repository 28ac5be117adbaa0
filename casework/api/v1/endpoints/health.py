"""Health check endpoint. No dependencies; used for liveness checks."""

from fastapi import APIRouter

from casework.core.config import get_settings
from casework.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return ok with the running version and record store backend."""
    settings = get_settings()
    return HealthResponse(
        version=settings.app_version,
        database_backend=settings.database_backend,
    )
