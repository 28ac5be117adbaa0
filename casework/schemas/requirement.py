"""Requirement request API schemas."""

from datetime import datetime

from pydantic import Field

from casework.application.dtos import RequirementRequestOutcome
from casework.domain.enums import NotificationStatus, RequestStatus
from casework.schemas.common import CamelModel
from casework.schemas.document import DocumentSummary


class RequirementRequestCreate(CamelModel):
    """Request body for POST /requirements (staff)."""

    owner_id: str = Field(..., min_length=1, max_length=255)
    document_type: str = Field(..., min_length=1, max_length=128)
    target_member_id: str | None = None
    parent_case_id: str | None = None
    deadline_days: int | None = None
    notify: bool = False
    note: str | None = Field(default=None, max_length=2000)


class RequirementRequestItem(CamelModel):
    id: str
    owner_id: str
    document_type: str
    document_id: str
    status: RequestStatus
    target_member_id: str | None = None
    parent_case_id: str | None = None
    deadline_days: int | None = None
    due_at: datetime | None = None
    notify: bool
    notification_status: NotificationStatus
    note: str | None = None
    created_by: str
    created_at: datetime
    fulfilled_at: datetime | None = None


class RequirementRequestResponse(CamelModel):
    """Response for POST /requirements: the request and its document."""

    request: RequirementRequestItem
    document: DocumentSummary
    created: bool
    notified: bool

    @classmethod
    def from_outcome(cls, outcome: RequirementRequestOutcome) -> "RequirementRequestResponse":
        return cls(
            request=RequirementRequestItem.model_validate(outcome.request),
            document=DocumentSummary.from_entity(outcome.document),
            created=outcome.created,
            notified=outcome.notified,
        )
