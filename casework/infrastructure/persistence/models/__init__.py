"""Persistence models: ORM entities and mixins."""

from casework.infrastructure.persistence.models.case_document import CaseDocument
from casework.infrastructure.persistence.models.certification_quote import (
    ACTIVE_QUOTE_STATUSES,
    CertificationQuote,
)
from casework.infrastructure.persistence.models.document_history import DocumentHistory
from casework.infrastructure.persistence.models.mixins import (
    CuidMixin,
    TimestampMixin,
    VersionedMixin,
)
from casework.infrastructure.persistence.models.requirement_request import (
    RequirementRequest,
)

__all__ = [
    "ACTIVE_QUOTE_STATUSES",
    "CaseDocument",
    "CertificationQuote",
    "CuidMixin",
    "DocumentHistory",
    "RequirementRequest",
    "TimestampMixin",
    "VersionedMixin",
]
