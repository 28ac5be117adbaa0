"""Case checklist API: required documents of a service and where each stands."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from casework.api.v1.dependencies import CurrentActor, get_case_checklist_use_case
from casework.application.use_cases import GetCaseChecklistUseCase
from casework.schemas.checklist import CaseChecklistResponse

router = APIRouter()


@router.get("/{owner_id}/checklist", response_model=CaseChecklistResponse)
async def get_case_checklist(
    owner_id: str,
    actor: CurrentActor,
    use_case: Annotated[GetCaseChecklistUseCase, Depends(get_case_checklist_use_case)],
    service_type: str = Query(...),
    member_id: str | None = Query(None),
    parent_case_id: str | None = Query(None),
):
    result = await use_case.execute(
        actor,
        owner_id,
        service_type,
        member_id=member_id,
        parent_case_id=parent_case_id,
    )
    return CaseChecklistResponse.from_result(result)
