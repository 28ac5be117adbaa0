"""Immutable audit entry for a document status transition."""

from dataclasses import dataclass
from datetime import datetime

from casework.domain.enums import ActorRole, DocumentStatus


@dataclass(frozen=True)
class DocumentHistoryEntry:
    """One applied transition. Used for audit and the client-facing timeline."""

    id: str
    document_id: str
    stage: str  # submission | review | apostille | translation
    from_status: DocumentStatus | None
    to_status: DocumentStatus
    actor_id: str
    actor_role: ActorRole
    timestamp: datetime
    note: str | None = None
