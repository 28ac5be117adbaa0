"""Case checklist API schemas."""

from casework.application.dtos import CaseChecklistResult
from casework.domain.enums import DocumentStatus, Stage
from casework.schemas.common import CamelModel


class ChecklistItemResponse(CamelModel):
    document_type: str
    name: str
    description: str
    required: bool
    stage: Stage
    document_id: str | None = None
    status: DocumentStatus | None = None


class CaseChecklistResponse(CamelModel):
    owner_id: str
    service_type: str
    member_id: str | None = None
    items: list[ChecklistItemResponse]
    all_completed: bool

    @classmethod
    def from_result(cls, result: CaseChecklistResult) -> "CaseChecklistResponse":
        return cls(
            owner_id=result.owner_id,
            service_type=result.service_type,
            member_id=result.member_id,
            items=[
                ChecklistItemResponse(
                    document_type=item.document_type,
                    name=item.name,
                    description=item.description,
                    required=item.required,
                    stage=item.stage,
                    document_id=item.document.id if item.document else None,
                    status=item.document.status if item.document else None,
                )
                for item in result.items
            ],
            all_completed=result.all_completed,
        )
