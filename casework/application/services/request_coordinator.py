"""Staff requirement requests: "I need document T from member M within N days".

Creates a REQUESTED placeholder when no usable document exists, keeps one
open request per (owner, type, member) and dispatches an optional
notification whose failure never undoes the request.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import replace
from datetime import datetime, timedelta

from casework.application.dtos.requirement import RequirementRequestOutcome
from casework.application.interfaces.repositories import (
    IDocumentHistoryRepository,
    IDocumentRepository,
    IRequirementRequestRepository,
)
from casework.application.interfaces.services import INotificationService
from casework.application.services.authorization import require_role
from casework.domain.certification_paths import CertificationPathTable
from casework.domain.entities import (
    Actor,
    DocumentEntity,
    DocumentHistoryEntry,
    RequirementRequestEntity,
)
from casework.domain.enums import ActorRole, DocumentStatus, NotificationStatus, RequestStatus
from casework.domain.exceptions import DuplicateRecordException, ValidationException
from casework.shared.telemetry.logging import get_logger
from casework.shared.utils.datetime import utc_now
from casework.shared.utils.generators import generate_cuid

logger = get_logger(__name__)

DEFAULT_DEADLINE_DAYS = 7


class RequirementRequestCoordinator:
    """Creates requirement requests and their placeholder documents."""

    def __init__(
        self,
        request_repo: IRequirementRequestRepository,
        document_repo: IDocumentRepository,
        history_repo: IDocumentHistoryRepository,
        notification_service: INotificationService,
        certification_paths: CertificationPathTable | None = None,
        default_deadline_days: int = DEFAULT_DEADLINE_DAYS,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._requests = request_repo
        self._documents = document_repo
        self._history = history_repo
        self._notifier = notification_service
        self._paths = certification_paths or CertificationPathTable()
        self._default_deadline_days = default_deadline_days
        self._clock = clock

    async def request_document(
        self,
        actor: Actor,
        owner_id: str,
        document_type: str,
        target_member_id: str | None = None,
        parent_case_id: str | None = None,
        deadline_days: int | None = None,
        notify: bool = False,
        note: str | None = None,
    ) -> RequirementRequestOutcome:
        """Ask a client for a document.

        Repeating the call while the first request is open returns the same
        request and document without notifying again. With notify=False no
        deadline is recorded even when deadline_days is passed.
        """
        require_role(actor, (ActorRole.STAFF,), "REQUEST_DOCUMENT")
        if not owner_id or not owner_id.strip():
            raise ValidationException("owner_id is required", field="owner_id")
        if not document_type or not document_type.strip():
            raise ValidationException("document_type is required", field="document_type")
        if deadline_days is not None and deadline_days <= 0:
            raise ValidationException("deadline_days must be > 0", field="deadline_days")
        target_member_id = (target_member_id or "").strip() or None

        open_request = await self._requests.find_open(owner_id, document_type, target_member_id)
        if open_request is not None:
            outcome = await self._existing_outcome(open_request)
            if outcome is not None:
                return outcome
            # The request points at a document that no longer exists.
            await self._requests.update(
                replace(open_request, status=RequestStatus.CANCELLED),
                expected_version=open_request.version,
            )

        now = self._clock()
        effective_days = (deadline_days or self._default_deadline_days) if notify else None
        due_at = now + timedelta(days=effective_days) if effective_days else None

        document = await self._documents.find_by_requirement(
            owner_id, document_type, target_member_id
        )
        needs_placeholder = document is None or document.is_fully_complete(
            self._paths.path_for(document_type)
        )
        document_id = generate_cuid() if needs_placeholder or document is None else document.id

        # The request goes in first: the open-request unique key decides a
        # race before any placeholder is written.
        try:
            request = await self._requests.create(
                RequirementRequestEntity(
                    id=generate_cuid(),
                    owner_id=owner_id,
                    document_type=document_type,
                    document_id=document_id,
                    created_by=actor.id,
                    created_at=now,
                    target_member_id=target_member_id,
                    parent_case_id=parent_case_id,
                    deadline_days=effective_days,
                    due_at=due_at,
                    notify=notify,
                    note=note,
                )
            )
        except DuplicateRecordException:
            winner = await self._requests.find_open(owner_id, document_type, target_member_id)
            outcome = await self._existing_outcome(winner) if winner is not None else None
            if outcome is None:
                raise
            return outcome

        if needs_placeholder or document is None:
            document = await self._create_placeholder(
                actor,
                document_id,
                owner_id,
                document_type,
                target_member_id,
                parent_case_id,
                due_at,
                note,
            )
        logger.info(
            "Requirement request %s created (owner=%s, type=%s, document=%s)",
            request.id,
            owner_id,
            document_type,
            document.id,
        )

        notified = False
        if notify:
            request, notified = await self._dispatch_notification(request)
        return RequirementRequestOutcome(
            request=request, document=document, created=True, notified=notified
        )

    async def list_requests(self, owner_id: str) -> list[RequirementRequestEntity]:
        return await self._requests.list_by_owner(owner_id)

    async def _existing_outcome(
        self, request: RequirementRequestEntity
    ) -> RequirementRequestOutcome | None:
        document = await self._documents.get_by_id(request.document_id)
        if document is None:
            return None
        logger.info(
            "Requirement request %s already open for owner=%s type=%s",
            request.id,
            request.owner_id,
            request.document_type,
        )
        return RequirementRequestOutcome(
            request=request, document=document, created=False, notified=False
        )

    async def _create_placeholder(
        self,
        actor: Actor,
        document_id: str,
        owner_id: str,
        document_type: str,
        member_id: str | None,
        parent_case_id: str | None,
        due_at: datetime | None,
        note: str | None,
    ) -> DocumentEntity:
        now = self._clock()
        placeholder = await self._documents.create(
            DocumentEntity(
                id=document_id,
                owner_id=owner_id,
                document_type=document_type,
                status=DocumentStatus.REQUESTED,
                created_at=now,
                updated_at=now,
                parent_case_id=parent_case_id,
                member_id=member_id,
                due_at=due_at,
            )
        )
        await self._history.append(
            DocumentHistoryEntry(
                id=generate_cuid(),
                document_id=placeholder.id,
                stage="submission",
                from_status=None,
                to_status=DocumentStatus.REQUESTED,
                actor_id=actor.id,
                actor_role=actor.role,
                timestamp=now,
                note=note,
            )
        )
        return placeholder

    async def _dispatch_notification(
        self, request: RequirementRequestEntity
    ) -> tuple[RequirementRequestEntity, bool]:
        message = f"Please provide your {request.document_type.replace('_', ' ')}"
        if request.due_at is not None:
            message = f"{message} by {request.due_at:%Y-%m-%d}"
        if request.note:
            message = f"{message}. {request.note}"
        try:
            await self._notifier.notify(request.owner_id, message, request.due_at)
            status = NotificationStatus.SENT
        except Exception:
            logger.warning(
                "Notification for requirement request %s failed; request kept",
                request.id,
                exc_info=True,
            )
            status = NotificationStatus.FAILED
        updated = await self._requests.update(
            replace(request, notification_status=status), expected_version=request.version
        )
        return updated, status == NotificationStatus.SENT
