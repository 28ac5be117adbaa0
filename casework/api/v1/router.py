"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from casework.api.v1.dependencies (no manual repo/service construction).
"""

from fastapi import APIRouter

from casework.api.v1.endpoints import cases, documents, health, quotes, requirements
from casework.schemas.common import ErrorResponse

_ERRORS = {
    400: {"model": ErrorResponse, "description": "Validation error"},
    403: {"model": ErrorResponse, "description": "Role or ownership check failed"},
    404: {"model": ErrorResponse, "description": "Resource not found"},
    409: {"model": ErrorResponse, "description": "Invalid transition, state or version conflict"},
    422: {"model": ErrorResponse, "description": "Missing reason or invalid amount"},
}

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(
    documents.router, prefix="/documents", tags=["documents"], responses=_ERRORS
)
api_router.include_router(quotes.router, prefix="/quotes", tags=["quotes"], responses=_ERRORS)
api_router.include_router(
    requirements.router, prefix="/requirements", tags=["requirements"], responses=_ERRORS
)
api_router.include_router(cases.router, prefix="/cases", tags=["cases"], responses=_ERRORS)
