"""Requirement request API: staff asking clients for documents."""

from fastapi import APIRouter, Query

from casework.api.v1.dependencies import CurrentActor, RequestCoordinatorDep
from casework.domain.enums import ActorRole
from casework.domain.exceptions import ForbiddenException
from casework.schemas.requirement import (
    RequirementRequestCreate,
    RequirementRequestItem,
    RequirementRequestResponse,
)

router = APIRouter()


@router.post("", response_model=RequirementRequestResponse, status_code=201)
async def create_requirement_request(
    body: RequirementRequestCreate,
    actor: CurrentActor,
    coordinator: RequestCoordinatorDep,
):
    """Request a document; an identical open request is returned instead of duplicated."""
    outcome = await coordinator.request_document(
        actor,
        owner_id=body.owner_id,
        document_type=body.document_type,
        target_member_id=body.target_member_id,
        parent_case_id=body.parent_case_id,
        deadline_days=body.deadline_days,
        notify=body.notify,
        note=body.note,
    )
    return RequirementRequestResponse.from_outcome(outcome)


@router.get("", response_model=list[RequirementRequestItem])
async def list_requirement_requests(
    actor: CurrentActor,
    coordinator: RequestCoordinatorDep,
    owner_id: str = Query(...),
):
    if actor.role == ActorRole.CLIENT and actor.id != owner_id:
        raise ForbiddenException(actor.role.value, "LIST_REQUIREMENTS")
    return [
        RequirementRequestItem.model_validate(r)
        for r in await coordinator.list_requests(owner_id)
    ]
