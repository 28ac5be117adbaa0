"""Pydantic request/response schemas for the API."""

from casework.schemas.checklist import CaseChecklistResponse, ChecklistItemResponse
from casework.schemas.common import CamelModel, ErrorResponse
from casework.schemas.document import (
    DocumentHistoryItem,
    DocumentResponse,
    DocumentStatusUpdate,
    DocumentSummary,
)
from casework.schemas.health import HealthResponse
from casework.schemas.quote import (
    CheckoutResponse,
    PaymentConfirmation,
    QuoteAction,
    QuoteRequestCreate,
    QuoteResponse,
    VendorQuoteSubmit,
)
from casework.schemas.requirement import (
    RequirementRequestCreate,
    RequirementRequestItem,
    RequirementRequestResponse,
)

__all__ = [
    "CamelModel",
    "CaseChecklistResponse",
    "ChecklistItemResponse",
    "CheckoutResponse",
    "DocumentHistoryItem",
    "DocumentResponse",
    "DocumentStatusUpdate",
    "DocumentSummary",
    "ErrorResponse",
    "HealthResponse",
    "PaymentConfirmation",
    "QuoteAction",
    "QuoteRequestCreate",
    "QuoteResponse",
    "RequirementRequestCreate",
    "RequirementRequestItem",
    "RequirementRequestResponse",
    "VendorQuoteSubmit",
]
