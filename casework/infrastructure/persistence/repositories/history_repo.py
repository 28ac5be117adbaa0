"""Document history repository (PostgreSQL). Append-only."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from casework.domain.entities import DocumentHistoryEntry
from casework.domain.enums import ActorRole, DocumentStatus
from casework.infrastructure.persistence.models.document_history import DocumentHistory
from casework.shared.utils.datetime import ensure_utc


def _history_to_entry(h: DocumentHistory) -> DocumentHistoryEntry:
    return DocumentHistoryEntry(
        id=h.id,
        document_id=h.document_id,
        stage=h.stage,
        from_status=DocumentStatus(h.from_status) if h.from_status else None,
        to_status=DocumentStatus(h.to_status),
        actor_id=h.actor_id,
        actor_role=ActorRole(h.actor_role),
        timestamp=ensure_utc(h.timestamp),
        note=h.note,
    )


class DocumentHistoryRepository:
    """IDocumentHistoryRepository over the document_history table. No update or delete."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def append(self, entry: DocumentHistoryEntry) -> DocumentHistoryEntry:
        self.db.add(
            DocumentHistory(
                id=entry.id,
                document_id=entry.document_id,
                stage=entry.stage,
                from_status=entry.from_status.value if entry.from_status else None,
                to_status=entry.to_status.value,
                actor_id=entry.actor_id,
                actor_role=entry.actor_role.value,
                timestamp=entry.timestamp,
                note=entry.note,
            )
        )
        await self.db.flush()
        return entry

    async def list_by_document(self, document_id: str) -> list[DocumentHistoryEntry]:
        result = await self.db.execute(
            select(DocumentHistory)
            .where(DocumentHistory.document_id == document_id)
            .order_by(DocumentHistory.timestamp)
        )
        return [_history_to_entry(h) for h in result.scalars().all()]
