"""Application DTOs (no dependency on ORM or HTTP schemas)."""

from casework.application.dtos.checklist import CaseChecklistResult, ChecklistItem
from casework.application.dtos.document import DocumentUpload, DocumentView
from casework.application.dtos.quote import CheckoutSession
from casework.application.dtos.requirement import RequirementRequestOutcome

__all__ = [
    "CaseChecklistResult",
    "ChecklistItem",
    "CheckoutSession",
    "DocumentUpload",
    "DocumentView",
    "RequirementRequestOutcome",
]
