"""In-memory record store (default backend and test double)."""

from casework.infrastructure.persistence.memory.repositories import (
    InMemoryDocumentHistoryRepository,
    InMemoryDocumentRepository,
    InMemoryQuoteRepository,
    InMemoryRequirementRequestRepository,
    InMemoryStore,
)

__all__ = [
    "InMemoryDocumentHistoryRepository",
    "InMemoryDocumentRepository",
    "InMemoryQuoteRepository",
    "InMemoryRequirementRequestRepository",
    "InMemoryStore",
]
