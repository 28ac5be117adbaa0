"""Requirement request entity: staff asking a client to supply or resubmit a document."""

from dataclasses import dataclass
from datetime import datetime

from casework.domain.enums import NotificationStatus, RequestStatus


@dataclass(frozen=True)
class RequirementRequestEntity:
    id: str
    owner_id: str
    document_type: str
    document_id: str
    created_by: str
    created_at: datetime
    status: RequestStatus = RequestStatus.OPEN
    target_member_id: str | None = None
    parent_case_id: str | None = None
    deadline_days: int | None = None
    due_at: datetime | None = None
    notify: bool = False
    notification_status: NotificationStatus = NotificationStatus.NOT_REQUESTED
    note: str | None = None
    fulfilled_at: datetime | None = None
    version: int = 1

    @property
    def is_open(self) -> bool:
        return self.status == RequestStatus.OPEN
