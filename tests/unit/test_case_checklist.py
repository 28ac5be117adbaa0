"""Tests for GetCaseChecklistUseCase."""

from dataclasses import replace

import pytest

from casework.application.use_cases import GetCaseChecklistUseCase
from casework.domain.enums import DocumentStatus, Stage
from casework.domain.exceptions import ForbiddenException, ValidationException


@pytest.fixture
def checklist(store, projector) -> GetCaseChecklistUseCase:
    return GetCaseChecklistUseCase(document_repo=store.documents, projector=projector)


async def test_empty_case_is_all_missing(checklist, actors) -> None:
    result = await checklist.execute(actors.staff, actors.client.id, "portuguese_citizenship")
    assert {i.stage for i in result.items} == {Stage.MISSING}
    assert result.all_completed is False


async def test_stages_follow_documents(checklist, upload, engine, coordinator, actors) -> None:
    passport = await upload("passport")
    await engine.approve(actors.staff, passport.id)
    birth = await upload("birth_certificate")
    await engine.approve(actors.staff, birth.id)
    await coordinator.request_document(actors.staff, actors.client.id, "proof_of_address")

    result = await checklist.execute(actors.client, actors.client.id, "portuguese_citizenship")
    stages = {i.document_type: i.stage for i in result.items}
    assert stages["passport"] == Stage.COMPLETED
    assert stages["birth_certificate"] == Stage.WAITING_APOSTILLE
    assert stages["proof_of_address"] == Stage.REQUESTED
    assert stages["ancestor_birth_certificate"] == Stage.MISSING
    assert result.all_completed is False


async def test_all_completed_ignores_optional_items(checklist, upload, engine, actors, store) -> None:
    required = ("birth_certificate", "passport", "ancestor_birth_certificate", "proof_of_address")
    for document_type in required:
        doc = await upload(document_type)
        approved = await engine.approve(actors.staff, doc.id)
        if approved.is_fully_complete(engine.required_certifications(approved)):
            continue
        current = await store.documents.get_by_id(doc.id)
        await store.documents.update(
            replace(
                current,
                status=DocumentStatus.APPROVED,
                is_apostilled=True,
                is_translated=True,
            ),
            expected_version=current.version,
        )
    result = await checklist.execute(actors.staff, actors.client.id, "portuguese_citizenship")
    assert result.all_completed is True
    optional = [i for i in result.items if not i.required]
    assert [i.stage for i in optional] == [Stage.MISSING]


async def test_member_scoping(checklist, upload, actors) -> None:
    await upload("passport", member_id="spouse")
    result = await checklist.execute(actors.staff, actors.client.id, "d7_visa")
    assert {i.document_type: i.stage for i in result.items}["passport"] == Stage.MISSING
    spouse = await checklist.execute(actors.staff, actors.client.id, "d7_visa", member_id="spouse")
    assert {i.document_type: i.stage for i in spouse.items}["passport"] == Stage.ANALYZING


async def test_unknown_service_type(checklist, actors) -> None:
    with pytest.raises(ValidationException):
        await checklist.execute(actors.staff, actors.client.id, "golden_visa_2")


async def test_client_cannot_read_other_checklist(checklist, actors) -> None:
    with pytest.raises(ForbiddenException):
        await checklist.execute(actors.other_client, actors.client.id, "d7_visa")
