"""Application services: status engine, quote negotiation, requirement requests, stage projection."""

from casework.application.services.quote_service import QuoteNegotiationService
from casework.application.services.request_coordinator import (
    RequirementRequestCoordinator,
)
from casework.application.services.stage_projector import StageProjector, project_stage
from casework.application.services.status_engine import DocumentStatusEngine

__all__ = [
    "DocumentStatusEngine",
    "QuoteNegotiationService",
    "RequirementRequestCoordinator",
    "StageProjector",
    "project_stage",
]
