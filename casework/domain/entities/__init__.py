"""Domain entities (frozen dataclasses, no ORM dependency)."""

from casework.domain.entities.actor import Actor
from casework.domain.entities.document import DocumentEntity
from casework.domain.entities.history import DocumentHistoryEntry
from casework.domain.entities.quote import QuoteEntity
from casework.domain.entities.requirement_request import RequirementRequestEntity

__all__ = [
    "Actor",
    "DocumentEntity",
    "DocumentHistoryEntry",
    "QuoteEntity",
    "RequirementRequestEntity",
]
