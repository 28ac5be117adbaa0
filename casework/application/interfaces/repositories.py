"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference domain entities only; no infrastructure imports.

`update(entity, expected_version)` is the optimistic-concurrency contract:
the write succeeds only when the stored version equals expected_version, the
stored version is then bumped and the persisted entity returned. Otherwise
ConflictException is raised.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from casework.domain.entities import (
        DocumentEntity,
        DocumentHistoryEntry,
        QuoteEntity,
        RequirementRequestEntity,
    )
    from casework.domain.enums import CertificationKind, QuoteStatus


# Document repository interface
class IDocumentRepository(Protocol):
    """Protocol for the document record store (DIP)."""

    async def get_by_id(self, document_id: str) -> DocumentEntity | None:
        """Return document by ID."""

    async def create(self, document: DocumentEntity) -> DocumentEntity:
        """Persist a new document (version 1)."""

    async def update(
        self, document: DocumentEntity, expected_version: int
    ) -> DocumentEntity:
        """Write document if stored version == expected_version; raise ConflictException otherwise."""

    async def delete(self, document_id: str) -> bool:
        """Remove document. Returns True if it existed."""

    async def list_by_owner(self, owner_id: str) -> list[DocumentEntity]:
        """Return documents of an owner (oldest first)."""

    async def list_by_parent_case(self, parent_case_id: str) -> list[DocumentEntity]:
        """Return documents attached to a case (oldest first)."""

    async def find_by_requirement(
        self, owner_id: str, document_type: str, member_id: str | None
    ) -> DocumentEntity | None:
        """Return the most recent document for (owner, type, member), if any."""


# Quote repository interface
class IQuoteRepository(Protocol):
    """Protocol for the quote record store (DIP)."""

    async def get_by_id(self, quote_id: str) -> QuoteEntity | None:
        """Return quote by ID."""

    async def create(self, quote: QuoteEntity) -> QuoteEntity:
        """Persist a new quote (version 1)."""

    async def update(self, quote: QuoteEntity, expected_version: int) -> QuoteEntity:
        """Write quote if stored version == expected_version; raise ConflictException otherwise."""

    async def get_active(
        self, document_id: str, kind: CertificationKind
    ) -> QuoteEntity | None:
        """Return the single non-terminal quote for (document, kind), if any."""

    async def list_by_document(self, document_id: str) -> list[QuoteEntity]:
        """Return all quotes for a document (oldest first)."""

    async def list_by_status(self, status: QuoteStatus) -> list[QuoteEntity]:
        """Return quotes in a status (work queues)."""


# Document history repository interface
class IDocumentHistoryRepository(Protocol):
    """Protocol for the append-only transition log."""

    async def append(self, entry: DocumentHistoryEntry) -> DocumentHistoryEntry:
        """Append an immutable history entry."""

    async def list_by_document(self, document_id: str) -> list[DocumentHistoryEntry]:
        """Return history entries for a document in chronological order."""


# Requirement request repository interface
class IRequirementRequestRepository(Protocol):
    """Protocol for staff requirement requests."""

    async def create(
        self, request: RequirementRequestEntity
    ) -> RequirementRequestEntity:
        """Persist a new request (version 1)."""

    async def update(
        self, request: RequirementRequestEntity, expected_version: int
    ) -> RequirementRequestEntity:
        """Write request if stored version == expected_version; raise ConflictException otherwise."""

    async def get_by_id(self, request_id: str) -> RequirementRequestEntity | None:
        """Return request by ID."""

    async def find_open(
        self, owner_id: str, document_type: str, member_id: str | None
    ) -> RequirementRequestEntity | None:
        """Return the open request for (owner, type, member), if any."""

    async def list_open_by_document(
        self, document_id: str
    ) -> list[RequirementRequestEntity]:
        """Return open requests attached to a document."""

    async def list_by_owner(self, owner_id: str) -> list[RequirementRequestEntity]:
        """Return all requests for an owner (oldest first)."""
