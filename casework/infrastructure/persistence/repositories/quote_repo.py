"""Certification quote repository (PostgreSQL). Returns domain entities."""

from __future__ import annotations

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from casework.domain.entities import QuoteEntity
from casework.domain.enums import CertificationKind, QuoteStatus
from casework.infrastructure.persistence.models.certification_quote import (
    ACTIVE_QUOTE_STATUSES,
    CertificationQuote,
)
from casework.infrastructure.persistence.repositories.base import VersionedRepository
from casework.shared.utils.datetime import ensure_utc


def _quote_to_entity(q: CertificationQuote) -> QuoteEntity:
    """Map ORM CertificationQuote to QuoteEntity."""
    return QuoteEntity(
        id=q.id,
        document_id=q.document_id,
        kind=CertificationKind(q.kind),
        status=QuoteStatus(q.status),
        created_at=ensure_utc(q.created_at),
        updated_at=ensure_utc(q.updated_at),
        base_cost=q.base_cost,
        markup_percent=q.markup_percent,
        final_price=q.final_price,
        deadline=q.deadline,
        vendor_notes=q.vendor_notes,
        requested_by=q.requested_by,
        quoted_by=q.quoted_by,
        published_by=q.published_by,
        decided_by=q.decided_by,
        rejection_reason=q.rejection_reason,
        payment_reference=q.payment_reference,
        idempotency_key=q.idempotency_key,
        version=q.version,
    )


class QuoteRepository(VersionedRepository[CertificationQuote, QuoteEntity]):
    """IQuoteRepository over the certification_quote table."""

    resource_type = "quote"

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, CertificationQuote)

    def _to_entity(self, obj: CertificationQuote) -> QuoteEntity:
        return _quote_to_entity(obj)

    def _to_values(self, entity: QuoteEntity) -> dict[str, Any]:
        return {
            "id": entity.id,
            "document_id": entity.document_id,
            "kind": entity.kind.value,
            "status": entity.status.value,
            "created_at": entity.created_at,
            "updated_at": entity.updated_at,
            "base_cost": entity.base_cost,
            "markup_percent": entity.markup_percent,
            "final_price": entity.final_price,
            "deadline": entity.deadline,
            "vendor_notes": entity.vendor_notes,
            "requested_by": entity.requested_by,
            "quoted_by": entity.quoted_by,
            "published_by": entity.published_by,
            "decided_by": entity.decided_by,
            "rejection_reason": entity.rejection_reason,
            "payment_reference": entity.payment_reference,
            "idempotency_key": entity.idempotency_key,
        }

    async def get_active(
        self, document_id: str, kind: CertificationKind
    ) -> QuoteEntity | None:
        matches = await self._list(
            CertificationQuote.document_id == document_id,
            CertificationQuote.kind == kind.value,
            CertificationQuote.status.in_(ACTIVE_QUOTE_STATUSES),
        )
        return matches[-1] if matches else None

    async def list_by_document(self, document_id: str) -> list[QuoteEntity]:
        return await self._list(CertificationQuote.document_id == document_id)

    async def list_by_status(self, status: QuoteStatus) -> list[QuoteEntity]:
        return await self._list(CertificationQuote.status == status.value)
