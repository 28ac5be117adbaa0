"""SQL repositories (PostgreSQL via SQLAlchemy async). Return domain entities."""

from casework.infrastructure.persistence.repositories.document_repo import (
    DocumentRepository,
)
from casework.infrastructure.persistence.repositories.history_repo import (
    DocumentHistoryRepository,
)
from casework.infrastructure.persistence.repositories.quote_repo import QuoteRepository
from casework.infrastructure.persistence.repositories.requirement_request_repo import (
    RequirementRequestRepository,
)

__all__ = [
    "DocumentHistoryRepository",
    "DocumentRepository",
    "QuoteRepository",
    "RequirementRequestRepository",
]
