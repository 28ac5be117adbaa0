"""Case document repository (PostgreSQL). Returns domain entities."""

from __future__ import annotations

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from casework.domain.entities import DocumentEntity
from casework.domain.enums import DocumentStatus
from casework.infrastructure.persistence.models.case_document import CaseDocument
from casework.infrastructure.persistence.repositories.base import VersionedRepository
from casework.shared.utils.datetime import ensure_utc


def _document_to_entity(d: CaseDocument) -> DocumentEntity:
    """Map ORM CaseDocument to DocumentEntity."""
    return DocumentEntity(
        id=d.id,
        owner_id=d.owner_id,
        document_type=d.document_type,
        status=DocumentStatus(d.status),
        created_at=ensure_utc(d.created_at),
        updated_at=ensure_utc(d.updated_at),
        parent_case_id=d.parent_case_id,
        member_id=d.member_id,
        is_apostilled=d.is_apostilled,
        is_translated=d.is_translated,
        rejection_reason=d.rejection_reason,
        storage_ref=d.storage_ref,
        public_url=d.public_url,
        original_filename=d.original_filename,
        content_type=d.content_type,
        file_size=d.file_size,
        revision=d.revision,
        due_at=ensure_utc(d.due_at),
        reviewed_at=ensure_utc(d.reviewed_at),
        reviewed_by=d.reviewed_by,
        version=d.version,
    )


class DocumentRepository(VersionedRepository[CaseDocument, DocumentEntity]):
    """IDocumentRepository over the case_document table."""

    resource_type = "document"

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, CaseDocument)

    def _to_entity(self, obj: CaseDocument) -> DocumentEntity:
        return _document_to_entity(obj)

    def _to_values(self, entity: DocumentEntity) -> dict[str, Any]:
        return {
            "id": entity.id,
            "owner_id": entity.owner_id,
            "document_type": entity.document_type,
            "status": entity.status.value,
            "created_at": entity.created_at,
            "updated_at": entity.updated_at,
            "parent_case_id": entity.parent_case_id,
            "member_id": entity.member_id,
            "is_apostilled": entity.is_apostilled,
            "is_translated": entity.is_translated,
            "rejection_reason": entity.rejection_reason,
            "storage_ref": entity.storage_ref,
            "public_url": entity.public_url,
            "original_filename": entity.original_filename,
            "content_type": entity.content_type,
            "file_size": entity.file_size,
            "revision": entity.revision,
            "due_at": entity.due_at,
            "reviewed_at": entity.reviewed_at,
            "reviewed_by": entity.reviewed_by,
        }

    async def list_by_owner(self, owner_id: str) -> list[DocumentEntity]:
        return await self._list(CaseDocument.owner_id == owner_id)

    async def list_by_parent_case(self, parent_case_id: str) -> list[DocumentEntity]:
        return await self._list(CaseDocument.parent_case_id == parent_case_id)

    async def find_by_requirement(
        self, owner_id: str, document_type: str, member_id: str | None
    ) -> DocumentEntity | None:
        """Most recently created document for (owner, type, member)."""
        member_clause = (
            CaseDocument.member_id.is_(None)
            if member_id is None
            else CaseDocument.member_id == member_id
        )
        matches = await self._list(
            CaseDocument.owner_id == owner_id,
            CaseDocument.document_type == document_type,
            member_clause,
        )
        return matches[-1] if matches else None
