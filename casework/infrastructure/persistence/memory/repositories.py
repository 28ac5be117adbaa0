"""Process-local repositories with the same optimistic-concurrency contract as SQL.

Each repository guards its records with an asyncio.Lock; update() compares the
stored version with expected_version inside the lock, so of two concurrent
writers that read the same version exactly one succeeds. create() enforces the
same partial unique keys as the Postgres indexes.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from typing import Any, Generic, TypeVar

from casework.domain.entities import (
    DocumentEntity,
    DocumentHistoryEntry,
    QuoteEntity,
    RequirementRequestEntity,
)
from casework.domain.enums import CertificationKind, QuoteStatus, RequestStatus
from casework.domain.exceptions import (
    ConflictException,
    DuplicateRecordException,
    ResourceNotFoundException,
)


EntityType = TypeVar("EntityType")


class InMemoryVersionedRepository(Generic[EntityType]):
    """Dict-backed store keyed by id. Insertion order is creation order."""

    resource_type = "record"

    def __init__(self) -> None:
        self._items: dict[str, EntityType] = {}
        self._lock = asyncio.Lock()

    def _id(self, entity: EntityType) -> str:
        return getattr(entity, "id")

    def _unique_key(self, entity: EntityType) -> tuple[Any, ...] | None:
        """Key that at most one stored record may share; None opts out."""
        return None

    def _filter(self, predicate: Callable[[EntityType], bool]) -> list[EntityType]:
        return [item for item in self._items.values() if predicate(item)]

    async def get_by_id(self, entity_id: str) -> EntityType | None:
        return self._items.get(entity_id)

    async def create(self, entity: EntityType) -> EntityType:
        async with self._lock:
            entity_id = self._id(entity)
            if entity_id in self._items:
                raise ConflictException(self.resource_type, entity_id, 0)
            key = self._unique_key(entity)
            if key is not None and any(
                self._unique_key(item) == key for item in self._items.values()
            ):
                raise DuplicateRecordException(self.resource_type, entity_id)
            saved: Any = replace(entity, version=1)  # type: ignore[type-var]
            self._items[entity_id] = saved
            return saved

    async def update(self, entity: EntityType, expected_version: int) -> EntityType:
        async with self._lock:
            entity_id = self._id(entity)
            current: Any = self._items.get(entity_id)
            if current is None:
                raise ResourceNotFoundException(self.resource_type, entity_id)
            if current.version != expected_version:
                raise ConflictException(self.resource_type, entity_id, expected_version)
            saved: Any = replace(entity, version=expected_version + 1)  # type: ignore[type-var]
            self._items[entity_id] = saved
            return saved

    async def delete(self, entity_id: str) -> bool:
        async with self._lock:
            return self._items.pop(entity_id, None) is not None


class InMemoryDocumentRepository(InMemoryVersionedRepository[DocumentEntity]):
    resource_type = "document"

    async def list_by_owner(self, owner_id: str) -> list[DocumentEntity]:
        return self._filter(lambda d: d.owner_id == owner_id)

    async def list_by_parent_case(self, parent_case_id: str) -> list[DocumentEntity]:
        return self._filter(lambda d: d.parent_case_id == parent_case_id)

    async def find_by_requirement(
        self, owner_id: str, document_type: str, member_id: str | None
    ) -> DocumentEntity | None:
        matches = self._filter(
            lambda d: d.matches_requirement(owner_id, document_type, member_id)
        )
        return matches[-1] if matches else None


class InMemoryQuoteRepository(InMemoryVersionedRepository[QuoteEntity]):
    resource_type = "quote"

    def _unique_key(self, entity: QuoteEntity) -> tuple[Any, ...] | None:
        return (entity.document_id, entity.kind) if entity.is_active else None

    async def get_active(
        self, document_id: str, kind: CertificationKind
    ) -> QuoteEntity | None:
        matches = self._filter(
            lambda q: q.document_id == document_id and q.kind == kind and q.is_active
        )
        return matches[-1] if matches else None

    async def list_by_document(self, document_id: str) -> list[QuoteEntity]:
        return self._filter(lambda q: q.document_id == document_id)

    async def list_by_status(self, status: QuoteStatus) -> list[QuoteEntity]:
        return self._filter(lambda q: q.status == status)


class InMemoryRequirementRequestRepository(
    InMemoryVersionedRepository[RequirementRequestEntity]
):
    resource_type = "requirement_request"

    def _unique_key(self, entity: RequirementRequestEntity) -> tuple[Any, ...] | None:
        if entity.status != RequestStatus.OPEN:
            return None
        return (entity.owner_id, entity.document_type, entity.target_member_id or "")

    async def find_open(
        self, owner_id: str, document_type: str, member_id: str | None
    ) -> RequirementRequestEntity | None:
        matches = self._filter(
            lambda r: r.status == RequestStatus.OPEN
            and r.owner_id == owner_id
            and r.document_type == document_type
            and r.target_member_id == member_id
        )
        return matches[-1] if matches else None

    async def list_open_by_document(
        self, document_id: str
    ) -> list[RequirementRequestEntity]:
        return self._filter(lambda r: r.document_id == document_id and r.is_open)

    async def list_by_owner(self, owner_id: str) -> list[RequirementRequestEntity]:
        return self._filter(lambda r: r.owner_id == owner_id)


class InMemoryDocumentHistoryRepository:
    """Append-only list of history entries."""

    def __init__(self) -> None:
        self._entries: list[DocumentHistoryEntry] = []
        self._lock = asyncio.Lock()

    async def append(self, entry: DocumentHistoryEntry) -> DocumentHistoryEntry:
        async with self._lock:
            self._entries.append(entry)
        return entry

    async def list_by_document(self, document_id: str) -> list[DocumentHistoryEntry]:
        return [e for e in self._entries if e.document_id == document_id]


@dataclass
class InMemoryStore:
    """The four in-memory repositories, held on app.state for the process lifetime."""

    documents: InMemoryDocumentRepository = field(default_factory=InMemoryDocumentRepository)
    quotes: InMemoryQuoteRepository = field(default_factory=InMemoryQuoteRepository)
    history: InMemoryDocumentHistoryRepository = field(
        default_factory=InMemoryDocumentHistoryRepository
    )
    requests: InMemoryRequirementRequestRepository = field(
        default_factory=InMemoryRequirementRequestRepository
    )
