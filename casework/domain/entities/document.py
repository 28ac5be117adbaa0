"""Document domain entity.

One record per uploaded (or requested) document. `status` is the single
source of truth for workflow position; the certification flags record which
certification steps have completed for the current revision.
"""

from dataclasses import dataclass
from datetime import datetime

from casework.domain.enums import CertificationKind, DocumentStatus


@dataclass(frozen=True)
class DocumentEntity:
    """Domain entity for a case document."""

    id: str
    owner_id: str
    document_type: str
    status: DocumentStatus
    created_at: datetime
    updated_at: datetime
    parent_case_id: str | None = None
    member_id: str | None = None
    is_apostilled: bool = False
    is_translated: bool = False
    rejection_reason: str | None = None
    storage_ref: str | None = None
    public_url: str | None = None
    original_filename: str | None = None
    content_type: str | None = None
    file_size: int | None = None
    revision: int = 0
    due_at: datetime | None = None
    reviewed_at: datetime | None = None
    reviewed_by: str | None = None
    version: int = 1

    def is_certified(self, kind: CertificationKind) -> bool:
        """Return whether the given certification step is done for this revision."""
        if kind == CertificationKind.APOSTILLE:
            return self.is_apostilled
        return self.is_translated

    def pending_certifications(
        self, required: tuple[CertificationKind, ...]
    ) -> tuple[CertificationKind, ...]:
        """Return required kinds not yet certified, in path order."""
        return tuple(kind for kind in required if not self.is_certified(kind))

    def is_fully_complete(self, required: tuple[CertificationKind, ...]) -> bool:
        """APPROVED with every required certification done (unrequired steps are vacuous)."""
        return self.status == DocumentStatus.APPROVED and not self.pending_certifications(
            required
        )

    def belongs_to(self, owner_id: str) -> bool:
        return self.owner_id == owner_id

    def matches_requirement(
        self, owner_id: str, document_type: str, member_id: str | None
    ) -> bool:
        """Return whether this document answers a (owner, type, member) requirement."""
        return (
            self.owner_id == owner_id
            and self.document_type == document_type
            and self.member_id == member_id
        )
