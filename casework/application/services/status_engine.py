"""Document status engine: the authoritative state machine for a single document.

Every state change goes through _apply: the transition table decides the
target status, the role table decides who may ask, the record store enforces
optimistic concurrency and each applied transition appends one history entry.
A document entering APPROVED with a certification still pending is advanced
to WAITING_<next kind> in the same operation.
"""

from __future__ import annotations

import os
from collections.abc import Callable
from dataclasses import replace
from datetime import datetime
from typing import Any

from casework.application.dtos.document import DocumentUpload
from casework.application.interfaces.repositories import (
    IDocumentHistoryRepository,
    IDocumentRepository,
    IQuoteRepository,
    IRequirementRequestRepository,
)
from casework.application.interfaces.services import IStorageService
from casework.application.services.authorization import require_owner, require_role
from casework.domain.certification_paths import CertificationPathTable
from casework.domain.entities import Actor, DocumentEntity, DocumentHistoryEntry
from casework.domain.enums import (
    ActorRole,
    CertificationKind,
    DocumentAction,
    DocumentStatus,
    QuoteStatus,
    RequestStatus,
)
from casework.domain.exceptions import (
    CaseworkException,
    ForbiddenException,
    InvalidStateException,
    InvalidTransitionException,
    MissingRejectionReasonException,
    ResourceNotFoundException,
    ValidationException,
)
from casework.domain.status_machine import ACTION_ROLES, history_stage, resolve_transition
from casework.shared.telemetry.logging import get_logger
from casework.shared.utils.datetime import utc_now
from casework.shared.utils.generators import generate_cuid

logger = get_logger(__name__)

_CERTIFICATION_FLAGS: dict[CertificationKind, str] = {
    CertificationKind.APOSTILLE: "is_apostilled",
    CertificationKind.TRANSLATION: "is_translated",
}


def _sanitize_filename(filename: str) -> str:
    """Strip path separators and dangerous characters from filename."""
    name = os.path.basename(filename.replace("\\", "/"))
    name = name.replace("\x00", "").strip(". ")
    if not name:
        raise ValidationException("Filename is empty or invalid", field="filename")
    return name


def _upload_note(from_status: DocumentStatus, replaced: bool) -> str:
    if not replaced:
        return "certified copy supplied"
    if from_status == DocumentStatus.REQUESTED:
        return "requested document submitted"
    return "document replaced"


def _describe(action: DocumentAction, kind: CertificationKind | None) -> str:
    return f"{action.value}({kind.value})" if kind else action.value


class DocumentStatusEngine:
    """Validates and applies document transitions for every actor."""

    def __init__(
        self,
        document_repo: IDocumentRepository,
        history_repo: IDocumentHistoryRepository,
        quote_repo: IQuoteRepository,
        request_repo: IRequirementRequestRepository,
        storage_service: IStorageService,
        certification_paths: CertificationPathTable | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._documents = document_repo
        self._history = history_repo
        self._quotes = quote_repo
        self._requests = request_repo
        self._storage = storage_service
        self._paths = certification_paths or CertificationPathTable()
        self._clock = clock

    # Reads

    async def get_document(
        self, document_id: str, actor: Actor | None = None
    ) -> DocumentEntity:
        """Return the document or raise ResourceNotFoundException.

        When an actor is given, clients may only read their own documents.
        """
        document = await self._documents.get_by_id(document_id)
        if document is None:
            raise ResourceNotFoundException("document", document_id)
        if actor is not None:
            require_owner(actor, document, "READ")
        return document

    async def list_documents(
        self,
        actor: Actor,
        owner_id: str | None = None,
        parent_case_id: str | None = None,
    ) -> list[DocumentEntity]:
        """List documents of an owner or of a case (clients only see their own)."""
        if owner_id:
            documents = await self._documents.list_by_owner(owner_id)
            if parent_case_id:
                documents = [d for d in documents if d.parent_case_id == parent_case_id]
        elif parent_case_id:
            documents = await self._documents.list_by_parent_case(parent_case_id)
        else:
            raise ValidationException(
                "owner_id or parent_case_id is required", field="owner_id"
            )
        if actor.role == ActorRole.CLIENT:
            documents = [d for d in documents if d.belongs_to(actor.id)]
        return documents

    async def get_history(
        self, document_id: str, actor: Actor | None = None
    ) -> list[DocumentHistoryEntry]:
        await self.get_document(document_id, actor)
        return await self._history.list_by_document(document_id)

    def required_certifications(
        self, document: DocumentEntity
    ) -> tuple[CertificationKind, ...]:
        return self._paths.path_for(document.document_type)

    # Client actions

    async def upload(self, actor: Actor, upload: DocumentUpload) -> DocumentEntity:
        """Store a client file and create or advance the matching document.

        Without document_id an existing REQUESTED placeholder for the same
        (owner, type, member) is filled; otherwise a new ANALYZING document is
        created. An upload that lands in ANALYZING replaces the content: the
        rejection reason and certification flags are cleared, open quotes are
        cancelled and the revision is bumped. Open requirement requests for the
        document are fulfilled.
        """
        require_role(actor, ACTION_ROLES[DocumentAction.UPLOAD], DocumentAction.UPLOAD.value)
        if actor.role == ActorRole.CLIENT and upload.owner_id != actor.id:
            raise ForbiddenException(
                actor.role.value,
                DocumentAction.UPLOAD.value,
                reason=f"Actor {actor.id} may not upload for owner {upload.owner_id}",
            )
        if not upload.content:
            raise ValidationException("Uploaded file is empty", field="file")
        filename = _sanitize_filename(upload.filename)

        existing = await self._resolve_upload_target(upload)
        target: DocumentStatus | None = DocumentStatus.ANALYZING
        if existing is not None:
            require_owner(actor, existing, DocumentAction.UPLOAD.value)
            target = resolve_transition(existing.status, DocumentAction.UPLOAD)
            if target is None:
                raise InvalidTransitionException(
                    existing.id,
                    existing.status.value,
                    DocumentAction.UPLOAD.value,
                    reason="a certification step is in progress",
                )

        document_id = existing.id if existing else generate_cuid()
        revision = (existing.revision if existing else 0) + 1
        storage_ref = await self._storage.store(
            upload.content,
            f"owners/{upload.owner_id}/documents/{document_id}/r{revision}/{filename}",
            upload.content_type,
        )
        file_changes: dict[str, Any] = {
            "storage_ref": storage_ref,
            "public_url": await self._storage.get_public_url(storage_ref),
            "original_filename": upload.filename,
            "content_type": upload.content_type,
            "file_size": len(upload.content),
            "revision": revision,
        }
        try:
            if existing is None:
                document = await self._create_uploaded(actor, upload, document_id, file_changes)
            else:
                document = await self._replace_content(actor, existing, target, file_changes)
        except CaseworkException:
            await self._storage.delete(storage_ref)
            raise
        await self._fulfil_requests(document.id)
        return document

    async def decline_quote(
        self,
        actor: Actor,
        document_id: str,
        kind: CertificationKind,
        note: str | None = None,
    ) -> DocumentEntity:
        """Client declined the quote: ANALYZING_<kind> back to WAITING_<kind>."""
        document = await self.get_document(document_id)
        return await self._apply(document, DocumentAction.DECLINE_QUOTE, actor, kind=kind, note=note)

    # Staff actions

    async def transition_to(
        self,
        actor: Actor,
        document_id: str,
        to_status: DocumentStatus,
        rejection_reason: str | None = None,
        note: str | None = None,
    ) -> DocumentEntity:
        """Map a requested target status onto the matching action and apply it."""
        if to_status == DocumentStatus.APPROVED:
            return await self.approve(actor, document_id, note=note)
        if to_status == DocumentStatus.REJECTED:
            return await self.reject(actor, document_id, rejection_reason, note=note)
        kind = to_status.certification_kind
        if kind is not None and to_status == DocumentStatus.waiting_for(kind):
            return await self.request_certification(actor, document_id, kind, note=note)
        if kind is not None:
            return await self.start_certification(actor, document_id, kind, note=note)
        document = await self.get_document(document_id)
        require_role(actor, (ActorRole.STAFF,), to_status.value)
        raise InvalidTransitionException(document.id, document.status.value, to_status.value)

    async def approve(
        self, actor: Actor, document_id: str, note: str | None = None
    ) -> DocumentEntity:
        """Approve the initial review, or complete the certification under analysis."""
        document = await self.get_document(document_id)
        kind = document.status.certification_kind
        if kind is not None and document.status == DocumentStatus.analyzing_for(kind):
            return await self._complete(document, kind, actor, note)
        approved = await self._apply(
            document,
            DocumentAction.APPROVE,
            actor,
            note=note,
            changes=self._review_stamp(actor),
        )
        return await self._auto_advance(approved, actor)

    async def reject(
        self,
        actor: Actor,
        document_id: str,
        reason: str | None,
        note: str | None = None,
    ) -> DocumentEntity:
        """Reject with a mandatory reason; open quotes for the document are cancelled."""
        document = await self.get_document(document_id)
        self._authorize(actor, DocumentAction.REJECT, document)
        if not reason or not reason.strip():
            raise MissingRejectionReasonException(document_id)
        if document.is_fully_complete(self.required_certifications(document)):
            raise InvalidTransitionException(
                document.id,
                document.status.value,
                DocumentAction.REJECT.value,
                reason="document is already complete",
            )
        rejected = await self._apply(
            document,
            DocumentAction.REJECT,
            actor,
            note=note,
            changes={"rejection_reason": reason.strip(), **self._review_stamp(actor)},
        )
        await self._cancel_open_quotes(rejected.id, "document rejected")
        return rejected

    async def request_certification(
        self,
        actor: Actor,
        document_id: str,
        kind: CertificationKind,
        note: str | None = None,
    ) -> DocumentEntity:
        """APPROVED -> WAITING_<kind>, only once every preceding step is certified."""
        document = await self.get_document(document_id)
        self._authorize(actor, DocumentAction.REQUEST_CERTIFICATION, document)
        self._check_certification_order(document, kind)
        return await self._apply(
            document, DocumentAction.REQUEST_CERTIFICATION, actor, kind=kind, note=note
        )

    async def start_certification(
        self,
        actor: Actor,
        document_id: str,
        kind: CertificationKind,
        note: str | None = None,
    ) -> DocumentEntity:
        """WAITING_<kind> -> ANALYZING_<kind>."""
        document = await self.get_document(document_id)
        return await self._apply(
            document, DocumentAction.START_CERTIFICATION, actor, kind=kind, note=note
        )

    async def complete_certification(
        self,
        actor: Actor,
        document_id: str,
        kind: CertificationKind,
        note: str | None = None,
    ) -> DocumentEntity:
        """ANALYZING_<kind> -> APPROVED with the kind's flag set.

        Staff may only complete a step that has no live quote; otherwise the
        payment callback does it.
        """
        document = await self.get_document(document_id)
        return await self._complete(document, kind, actor, note)

    async def delete_document(self, actor: Actor, document_id: str) -> None:
        """Delete a document, its current file and its open quotes.

        Refused while a PAID quote references the document.
        """
        document = await self.get_document(document_id)
        require_role(actor, (ActorRole.CLIENT, ActorRole.STAFF), "DELETE")
        require_owner(actor, document, "DELETE")
        for quote in await self._quotes.list_by_document(document_id):
            if quote.status == QuoteStatus.PAID:
                raise InvalidStateException(
                    "document",
                    document_id,
                    document.status.value,
                    expected=[],
                    reason=f"Document {document_id} has a paid quote ({quote.id}) and cannot be deleted",
                )
        await self._cancel_open_quotes(document_id, "document deleted")
        for request in await self._requests.list_open_by_document(document_id):
            await self._requests.update(
                replace(request, status=RequestStatus.CANCELLED),
                expected_version=request.version,
            )
        if document.storage_ref:
            await self._storage.delete(document.storage_ref)
        await self._documents.delete(document_id)
        logger.info(
            "Document %s deleted (actor_role=%s)", document_id, actor.role.value
        )

    # Internals

    def _authorize(
        self, actor: Actor, action: DocumentAction, document: DocumentEntity
    ) -> None:
        require_role(actor, ACTION_ROLES[action], action.value)
        require_owner(actor, document, action.value)

    def _review_stamp(self, actor: Actor) -> dict[str, Any]:
        return {"reviewed_at": self._clock(), "reviewed_by": actor.id}

    def _check_certification_order(
        self, document: DocumentEntity, kind: CertificationKind
    ) -> None:
        attempted = _describe(DocumentAction.REQUEST_CERTIFICATION, kind)
        if document.is_certified(kind):
            raise InvalidTransitionException(
                document.id,
                document.status.value,
                attempted,
                reason=f"{kind.value} is already completed",
            )
        missing = [
            k
            for k in self._paths.predecessors(document.document_type, kind)
            if not document.is_certified(k)
        ]
        if missing:
            raise InvalidTransitionException(
                document.id,
                document.status.value,
                attempted,
                reason=f"{', '.join(k.value for k in missing)} must be completed first",
            )

    async def _apply(
        self,
        document: DocumentEntity,
        action: DocumentAction,
        actor: Actor,
        *,
        kind: CertificationKind | None = None,
        note: str | None = None,
        changes: dict[str, Any] | None = None,
        authorize: bool = True,
    ) -> DocumentEntity:
        if authorize:
            self._authorize(actor, action, document)
        target = resolve_transition(document.status, action, kind)
        if target is None:
            raise InvalidTransitionException(
                document.id, document.status.value, _describe(action, kind)
            )
        now = self._clock()
        updated = replace(document, status=target, updated_at=now, **(changes or {}))
        saved = await self._documents.update(updated, expected_version=document.version)
        await self._history.append(
            DocumentHistoryEntry(
                id=generate_cuid(),
                document_id=saved.id,
                stage=history_stage(document.status, action, kind),
                from_status=document.status,
                to_status=target,
                actor_id=actor.id,
                actor_role=actor.role,
                timestamp=now,
                note=note,
            )
        )
        logger.info(
            "Document %s: %s -> %s (action=%s, actor_role=%s)",
            saved.id,
            document.status.value,
            target.value,
            _describe(action, kind),
            actor.role.value,
        )
        return saved

    async def _complete(
        self,
        document: DocumentEntity,
        kind: CertificationKind,
        actor: Actor,
        note: str | None,
    ) -> DocumentEntity:
        self._authorize(actor, DocumentAction.COMPLETE_CERTIFICATION, document)
        # With a live quote the step completes on payment, not on staff review.
        if actor.role != ActorRole.SYSTEM:
            active = await self._quotes.get_active(document.id, kind)
            if active is not None:
                raise InvalidStateException(
                    "document",
                    document.id,
                    document.status.value,
                    expected=[],
                    reason=(
                        f"Quote {active.id} for {kind.value} is {active.status.value}; "
                        "the step completes when the quote is paid"
                    ),
                )
        completed = await self._apply(
            document,
            DocumentAction.COMPLETE_CERTIFICATION,
            actor,
            kind=kind,
            note=note,
            changes={_CERTIFICATION_FLAGS[kind]: True, **self._review_stamp(actor)},
            authorize=False,
        )
        return await self._auto_advance(completed, actor)

    async def _auto_advance(
        self, document: DocumentEntity, actor: Actor
    ) -> DocumentEntity:
        """Move an APPROVED document on to its next pending certification, if any."""
        if document.status != DocumentStatus.APPROVED:
            return document
        pending = document.pending_certifications(self.required_certifications(document))
        if not pending:
            return document
        return await self._apply(
            document,
            DocumentAction.REQUEST_CERTIFICATION,
            actor,
            kind=pending[0],
            note="next required certification",
            authorize=False,
        )

    async def _resolve_upload_target(
        self, upload: DocumentUpload
    ) -> DocumentEntity | None:
        if upload.document_id:
            return await self.get_document(upload.document_id)
        candidate = await self._documents.find_by_requirement(
            upload.owner_id, upload.document_type, upload.member_id
        )
        if candidate is not None and candidate.status == DocumentStatus.REQUESTED:
            return candidate
        return None

    async def _create_uploaded(
        self,
        actor: Actor,
        upload: DocumentUpload,
        document_id: str,
        file_changes: dict[str, Any],
    ) -> DocumentEntity:
        now = self._clock()
        created = await self._documents.create(
            DocumentEntity(
                id=document_id,
                owner_id=upload.owner_id,
                document_type=upload.document_type,
                status=DocumentStatus.ANALYZING,
                created_at=now,
                updated_at=now,
                parent_case_id=upload.parent_case_id,
                member_id=upload.member_id,
                **file_changes,
            )
        )
        await self._history.append(
            DocumentHistoryEntry(
                id=generate_cuid(),
                document_id=created.id,
                stage=history_stage(None, DocumentAction.UPLOAD, None),
                from_status=None,
                to_status=created.status,
                actor_id=actor.id,
                actor_role=actor.role,
                timestamp=now,
            )
        )
        logger.info(
            "Document %s created by upload (type=%s)", created.id, created.document_type
        )
        return created

    async def _replace_content(
        self,
        actor: Actor,
        document: DocumentEntity,
        target: DocumentStatus | None,
        file_changes: dict[str, Any],
    ) -> DocumentEntity:
        changes = dict(file_changes)
        replaced = target == DocumentStatus.ANALYZING
        if replaced:
            changes.update(
                is_apostilled=False,
                is_translated=False,
                rejection_reason=None,
                reviewed_at=None,
                reviewed_by=None,
            )
        updated = await self._apply(
            document,
            DocumentAction.UPLOAD,
            actor,
            note=_upload_note(document.status, replaced),
            changes=changes,
            authorize=False,
        )
        if replaced:
            await self._cancel_open_quotes(updated.id, "document replaced")
        return updated

    async def _cancel_open_quotes(self, document_id: str, reason: str) -> None:
        now = self._clock()
        for quote in await self._quotes.list_by_document(document_id):
            if not quote.is_active:
                continue
            await self._quotes.update(
                replace(quote, status=QuoteStatus.CANCELLED, updated_at=now),
                expected_version=quote.version,
            )
            logger.info("Quote %s cancelled: %s", quote.id, reason)

    async def _fulfil_requests(self, document_id: str) -> None:
        now = self._clock()
        for request in await self._requests.list_open_by_document(document_id):
            await self._requests.update(
                replace(request, status=RequestStatus.FULFILLED, fulfilled_at=now),
                expected_version=request.version,
            )
