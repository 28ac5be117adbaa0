"""Requirement request repository (PostgreSQL). Returns domain entities."""

from __future__ import annotations

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from casework.domain.entities import RequirementRequestEntity
from casework.domain.enums import NotificationStatus, RequestStatus
from casework.infrastructure.persistence.models.requirement_request import (
    RequirementRequest,
)
from casework.infrastructure.persistence.repositories.base import VersionedRepository
from casework.shared.utils.datetime import ensure_utc


def _request_to_entity(r: RequirementRequest) -> RequirementRequestEntity:
    return RequirementRequestEntity(
        id=r.id,
        owner_id=r.owner_id,
        document_type=r.document_type,
        document_id=r.document_id,
        created_by=r.created_by,
        created_at=ensure_utc(r.created_at),
        status=RequestStatus(r.status),
        target_member_id=r.target_member_id,
        parent_case_id=r.parent_case_id,
        deadline_days=r.deadline_days,
        due_at=ensure_utc(r.due_at),
        notify=r.notify,
        notification_status=NotificationStatus(r.notification_status),
        note=r.note,
        fulfilled_at=ensure_utc(r.fulfilled_at),
        version=r.version,
    )


class RequirementRequestRepository(
    VersionedRepository[RequirementRequest, RequirementRequestEntity]
):
    """IRequirementRequestRepository over the requirement_request table."""

    resource_type = "requirement_request"

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, RequirementRequest)

    def _to_entity(self, obj: RequirementRequest) -> RequirementRequestEntity:
        return _request_to_entity(obj)

    def _to_values(self, entity: RequirementRequestEntity) -> dict[str, Any]:
        return {
            "id": entity.id,
            "owner_id": entity.owner_id,
            "document_type": entity.document_type,
            "document_id": entity.document_id,
            "created_by": entity.created_by,
            "created_at": entity.created_at,
            "status": entity.status.value,
            "target_member_id": entity.target_member_id,
            "parent_case_id": entity.parent_case_id,
            "deadline_days": entity.deadline_days,
            "due_at": entity.due_at,
            "notify": entity.notify,
            "notification_status": entity.notification_status.value,
            "note": entity.note,
            "fulfilled_at": entity.fulfilled_at,
        }

    async def find_open(
        self, owner_id: str, document_type: str, member_id: str | None
    ) -> RequirementRequestEntity | None:
        member_clause = (
            RequirementRequest.target_member_id.is_(None)
            if member_id is None
            else RequirementRequest.target_member_id == member_id
        )
        matches = await self._list(
            RequirementRequest.owner_id == owner_id,
            RequirementRequest.document_type == document_type,
            member_clause,
            RequirementRequest.status == RequestStatus.OPEN.value,
        )
        return matches[-1] if matches else None

    async def list_open_by_document(
        self, document_id: str
    ) -> list[RequirementRequestEntity]:
        return await self._list(
            RequirementRequest.document_id == document_id,
            RequirementRequest.status == RequestStatus.OPEN.value,
        )

    async def list_by_owner(self, owner_id: str) -> list[RequirementRequestEntity]:
        return await self._list(RequirementRequest.owner_id == owner_id)
