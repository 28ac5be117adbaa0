"""DTOs for the case checklist (required vs present documents)."""

from dataclasses import dataclass

from casework.domain.entities import DocumentEntity
from casework.domain.enums import Stage


@dataclass(frozen=True)
class ChecklistItem:
    """One required document type and where the matching document stands."""

    document_type: str
    name: str
    description: str
    required: bool
    stage: Stage
    document: DocumentEntity | None = None


@dataclass(frozen=True)
class CaseChecklistResult:
    owner_id: str
    service_type: str
    member_id: str | None
    items: list[ChecklistItem]
    all_completed: bool
