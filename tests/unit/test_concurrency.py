"""Concurrent writers on one document: exactly one wins, the other gets CONFLICT."""

import asyncio

from casework.application.services import DocumentStatusEngine
from casework.domain.entities import DocumentEntity
from casework.domain.enums import CertificationKind, DocumentStatus
from casework.domain.exceptions import CaseworkException, ConflictException
from casework.infrastructure.persistence.memory import InMemoryDocumentRepository


class YieldingDocumentRepository(InMemoryDocumentRepository):
    """Hands control back to the loop after each read so both callers see the same version."""

    async def get_by_id(self, entity_id: str) -> DocumentEntity | None:
        document = await super().get_by_id(entity_id)
        await asyncio.sleep(0)
        return document


async def test_concurrent_approvals_one_conflict(store, storage, paths, clock, upload, actors) -> None:
    doc = await upload("passport")
    racing_repo = YieldingDocumentRepository()
    await racing_repo.create(doc)
    engine = DocumentStatusEngine(
        document_repo=racing_repo,
        history_repo=store.history,
        quote_repo=store.quotes,
        request_repo=store.requests,
        storage_service=storage,
        certification_paths=paths,
        clock=clock,
    )

    results = await asyncio.gather(
        engine.approve(actors.staff, doc.id),
        engine.approve(actors.staff, doc.id),
        return_exceptions=True,
    )

    successes = [r for r in results if isinstance(r, DocumentEntity)]
    conflicts = [r for r in results if isinstance(r, ConflictException)]
    assert len(successes) == 1
    assert len(conflicts) == 1
    assert conflicts[0].to_dict()["errorKind"] == "CONFLICT"
    stored = await racing_repo.get_by_id(doc.id)
    assert stored.status == DocumentStatus.APPROVED
    assert stored.version == 2
    history = await store.history.list_by_document(doc.id)
    approvals = [h for h in history if h.to_status == DocumentStatus.APPROVED]
    assert len(approvals) == 1


async def test_concurrent_quote_requests_one_active(quotes, engine, upload, actors, store) -> None:
    doc = await upload("birth_certificate")
    await engine.approve(actors.staff, doc.id)

    results = await asyncio.gather(
        quotes.request_quote(actors.staff, doc.id, CertificationKind.APOSTILLE),
        quotes.request_quote(actors.staff, doc.id, CertificationKind.APOSTILLE),
        return_exceptions=True,
    )

    errors = [r for r in results if isinstance(r, CaseworkException)]
    assert len(errors) == 1
    active = [q for q in await store.quotes.list_by_document(doc.id) if q.is_active]
    assert len(active) == 1
