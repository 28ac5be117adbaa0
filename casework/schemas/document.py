"""Document API schemas."""

from datetime import datetime

from pydantic import Field

from casework.application.dtos import DocumentView
from casework.domain.entities import DocumentEntity, DocumentHistoryEntry
from casework.domain.enums import ActorRole, CertificationKind, DocumentStatus, Stage
from casework.schemas.common import CamelModel
from casework.schemas.quote import QuoteResponse


class DocumentResponse(CamelModel):
    """A document with its projected stage and open quotes."""

    id: str
    owner_id: str
    document_type: str
    status: DocumentStatus
    stage: Stage
    parent_case_id: str | None = None
    member_id: str | None = None
    is_apostilled: bool
    is_translated: bool
    required_certifications: list[CertificationKind] = Field(default_factory=list)
    rejection_reason: str | None = None
    public_url: str | None = None
    original_filename: str | None = None
    content_type: str | None = None
    file_size: int | None = None
    revision: int
    due_at: datetime | None = None
    reviewed_at: datetime | None = None
    reviewed_by: str | None = None
    created_at: datetime
    updated_at: datetime
    version: int
    active_quotes: list[QuoteResponse] = Field(default_factory=list)

    @classmethod
    def from_view(cls, view: DocumentView) -> "DocumentResponse":
        doc = view.document
        return cls(
            id=doc.id,
            owner_id=doc.owner_id,
            document_type=doc.document_type,
            status=doc.status,
            stage=view.stage,
            parent_case_id=doc.parent_case_id,
            member_id=doc.member_id,
            is_apostilled=doc.is_apostilled,
            is_translated=doc.is_translated,
            required_certifications=list(view.required_certifications),
            rejection_reason=doc.rejection_reason,
            public_url=doc.public_url,
            original_filename=doc.original_filename,
            content_type=doc.content_type,
            file_size=doc.file_size,
            revision=doc.revision,
            due_at=doc.due_at,
            reviewed_at=doc.reviewed_at,
            reviewed_by=doc.reviewed_by,
            created_at=doc.created_at,
            updated_at=doc.updated_at,
            version=doc.version,
            active_quotes=[QuoteResponse.model_validate(q) for q in view.active_quotes],
        )


class DocumentSummary(CamelModel):
    """Bare document record (no projection), e.g. a requirement placeholder."""

    id: str
    owner_id: str
    document_type: str
    status: DocumentStatus
    parent_case_id: str | None = None
    member_id: str | None = None
    due_at: datetime | None = None
    created_at: datetime

    @classmethod
    def from_entity(cls, doc: DocumentEntity) -> "DocumentSummary":
        return cls.model_validate(doc)


class DocumentStatusUpdate(CamelModel):
    """Request body for POST /documents/{id}/status."""

    to_status: DocumentStatus
    rejection_reason: str | None = Field(default=None, max_length=2000)
    note: str | None = Field(default=None, max_length=2000)


class DocumentHistoryItem(CamelModel):
    """One entry of the document timeline."""

    id: str
    document_id: str
    stage: str
    from_status: DocumentStatus | None = None
    to_status: DocumentStatus
    actor_id: str
    actor_role: ActorRole
    timestamp: datetime
    note: str | None = None

    @classmethod
    def from_entry(cls, entry: DocumentHistoryEntry) -> "DocumentHistoryItem":
        return cls.model_validate(entry)
