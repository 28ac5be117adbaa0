"""DTOs for document operations (no dependency on ORM)."""

from dataclasses import dataclass, field

from casework.domain.entities import DocumentEntity, QuoteEntity
from casework.domain.enums import CertificationKind, Stage


@dataclass(frozen=True)
class DocumentUpload:
    """Input for a client upload. document_id set means replace that document."""

    owner_id: str
    document_type: str
    content: bytes
    filename: str
    content_type: str
    parent_case_id: str | None = None
    member_id: str | None = None
    document_id: str | None = None


@dataclass(frozen=True)
class DocumentView:
    """Document read-model with its projected stage (same for every actor)."""

    document: DocumentEntity
    stage: Stage
    required_certifications: tuple[CertificationKind, ...]
    active_quotes: list[QuoteEntity] = field(default_factory=list)
