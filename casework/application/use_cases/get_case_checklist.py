"""Get case checklist use case: required vs present documents for a service type."""

from __future__ import annotations

from casework.application.dtos.checklist import CaseChecklistResult, ChecklistItem
from casework.application.interfaces.repositories import IDocumentRepository
from casework.application.services.stage_projector import StageProjector
from casework.domain.catalogue import get_required_documents, get_service_types
from casework.domain.entities import Actor
from casework.domain.enums import ActorRole, Stage
from casework.domain.exceptions import ForbiddenException, ValidationException


class GetCaseChecklistUseCase:
    """Computes one checklist item per catalogue entry with the projected stage."""

    def __init__(
        self,
        document_repo: IDocumentRepository,
        projector: StageProjector,
    ) -> None:
        self._document_repo = document_repo
        self._projector = projector

    async def execute(
        self,
        actor: Actor,
        owner_id: str,
        service_type: str,
        member_id: str | None = None,
        parent_case_id: str | None = None,
    ) -> CaseChecklistResult:
        """Return the checklist for an owner (optionally one family member / case).

        Raises:
            ValidationException: If service_type is not in the catalogue.
            ForbiddenException: If a client asks for another owner's case.
        """
        if actor.role == ActorRole.CLIENT and actor.id != owner_id:
            raise ForbiddenException(actor.role.value, "READ_CHECKLIST")
        catalogue = get_required_documents(service_type)
        if not catalogue:
            raise ValidationException(
                f"Unknown service_type {service_type!r}; expected one of {get_service_types()}",
                field="service_type",
            )
        documents = [
            d
            for d in await self._document_repo.list_by_owner(owner_id)
            if d.member_id == member_id
            and (parent_case_id is None or d.parent_case_id == parent_case_id)
        ]
        items: list[ChecklistItem] = []
        for entry in catalogue:
            matches = [d for d in documents if d.document_type == entry.document_type]
            # most recently touched document wins
            document = max(matches, key=lambda d: d.updated_at) if matches else None
            stage = (await self._projector.view(document)).stage if document else Stage.MISSING
            items.append(
                ChecklistItem(
                    document_type=entry.document_type,
                    name=entry.name,
                    description=entry.description,
                    required=entry.required,
                    stage=stage,
                    document=document,
                )
            )
        return CaseChecklistResult(
            owner_id=owner_id,
            service_type=service_type,
            member_id=member_id,
            items=items,
            all_completed=all(i.stage == Stage.COMPLETED for i in items if i.required),
        )
