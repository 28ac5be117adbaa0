"""Tests for RequirementRequestCoordinator: placeholders, dedup, deadlines, notifications."""

from datetime import timedelta
from unittest.mock import AsyncMock

import pytest

from casework.application.services import RequirementRequestCoordinator
from casework.domain.enums import DocumentStatus, NotificationStatus, RequestStatus
from casework.domain.exceptions import ForbiddenException, ValidationException


async def test_request_creates_placeholder(coordinator, engine, actors) -> None:
    outcome = await coordinator.request_document(
        actors.staff, actors.client.id, "marriage_certificate", parent_case_id="case-9"
    )
    assert outcome.created is True
    assert outcome.document.status == DocumentStatus.REQUESTED
    assert outcome.document.parent_case_id == "case-9"
    assert outcome.request.document_id == outcome.document.id
    history = await engine.get_history(outcome.document.id)
    assert [(h.stage, h.to_status) for h in history] == [("submission", DocumentStatus.REQUESTED)]


async def test_repeated_request_returns_same_placeholder(coordinator, store, actors, notifier) -> None:
    first = await coordinator.request_document(
        actors.staff, actors.client.id, "birth_certificate", target_member_id="m-1", notify=True
    )
    second = await coordinator.request_document(
        actors.staff, actors.client.id, "birth_certificate", target_member_id="m-1", notify=True
    )
    assert second.created is False
    assert second.document.id == first.document.id
    assert second.request.id == first.request.id
    assert len(await store.documents.list_by_owner(actors.client.id)) == 1
    assert notifier.notify.await_count == 1


async def test_different_member_gets_own_request(coordinator, actors) -> None:
    a = await coordinator.request_document(actors.staff, actors.client.id, "passport", "m-1")
    b = await coordinator.request_document(actors.staff, actors.client.id, "passport", "m-2")
    assert a.document.id != b.document.id


async def test_existing_document_is_attached_not_duplicated(coordinator, upload, actors) -> None:
    doc = await upload("passport")
    outcome = await coordinator.request_document(actors.staff, actors.client.id, "passport")
    assert outcome.document.id == doc.id
    assert outcome.document.status == DocumentStatus.ANALYZING


async def test_complete_document_gets_new_placeholder(coordinator, upload, engine, actors) -> None:
    doc = await upload("passport")
    await engine.approve(actors.staff, doc.id)
    outcome = await coordinator.request_document(actors.staff, actors.client.id, "passport")
    assert outcome.document.id != doc.id
    assert outcome.document.status == DocumentStatus.REQUESTED


async def test_notify_sets_deadline_and_sends(coordinator, notifier, clock, actors) -> None:
    outcome = await coordinator.request_document(
        actors.staff, actors.client.id, "criminal_record", deadline_days=10, notify=True
    )
    request = outcome.request
    assert outcome.notified is True
    assert request.deadline_days == 10
    assert request.due_at == request.created_at + timedelta(days=10)
    assert outcome.document.due_at == request.due_at
    assert request.notification_status == NotificationStatus.SENT
    target, message, deadline = notifier.notify.await_args.args
    assert target == actors.client.id
    assert "criminal record" in message
    assert deadline == request.due_at


async def test_notify_without_days_uses_default(store, paths, clock, actors) -> None:
    coordinator = RequirementRequestCoordinator(
        request_repo=store.requests,
        document_repo=store.documents,
        history_repo=store.history,
        notification_service=AsyncMock(),
        certification_paths=paths,
        default_deadline_days=14,
        clock=clock,
    )
    outcome = await coordinator.request_document(
        actors.staff, actors.client.id, "diploma", notify=True
    )
    assert outcome.request.deadline_days == 14


async def test_without_notify_no_deadline_is_recorded(coordinator, notifier, actors) -> None:
    outcome = await coordinator.request_document(
        actors.staff, actors.client.id, "diploma", deadline_days=5, notify=False
    )
    assert outcome.request.deadline_days is None
    assert outcome.request.due_at is None
    assert outcome.request.notification_status == NotificationStatus.NOT_REQUESTED
    assert outcome.notified is False
    notifier.notify.assert_not_awaited()


async def test_notifier_failure_keeps_request(coordinator, notifier, store, actors) -> None:
    notifier.notify.side_effect = ConnectionError("smtp down")
    outcome = await coordinator.request_document(
        actors.staff, actors.client.id, "photo", notify=True
    )
    assert outcome.created is True
    assert outcome.notified is False
    assert outcome.request.notification_status == NotificationStatus.FAILED
    stored = await store.requests.get_by_id(outcome.request.id)
    assert stored is not None
    assert await store.documents.get_by_id(outcome.document.id) is not None


async def test_only_staff_can_request(coordinator, actors) -> None:
    with pytest.raises(ForbiddenException):
        await coordinator.request_document(actors.client, actors.client.id, "photo")


@pytest.mark.parametrize(
    ("owner_id", "document_type", "deadline_days"),
    [("", "photo", None), ("client-1", " ", None), ("client-1", "photo", 0)],
)
async def test_invalid_input(coordinator, actors, owner_id, document_type, deadline_days) -> None:
    with pytest.raises(ValidationException):
        await coordinator.request_document(
            actors.staff, owner_id, document_type, deadline_days=deadline_days, notify=True
        )


async def test_list_requests_by_owner(coordinator, actors) -> None:
    await coordinator.request_document(actors.staff, actors.client.id, "photo")
    await coordinator.request_document(actors.staff, actors.other_client.id, "photo")
    requests = await coordinator.list_requests(actors.client.id)
    assert [r.owner_id for r in requests] == [actors.client.id]


async def test_lost_race_returns_winning_request(coordinator, store, actors, notifier, monkeypatch) -> None:
    first = await coordinator.request_document(actors.staff, actors.client.id, "photo", notify=True)
    real_find_open = store.requests.find_open
    calls = []

    async def stale_then_real(*args):
        # The first lookup misses the request a concurrent call just wrote.
        calls.append(args)
        return None if len(calls) == 1 else await real_find_open(*args)

    monkeypatch.setattr(store.requests, "find_open", stale_then_real)
    second = await coordinator.request_document(actors.staff, actors.client.id, "photo", notify=True)

    assert second.created is False
    assert second.request.id == first.request.id
    assert second.document.id == first.document.id
    assert len(await store.requests.list_by_owner(actors.client.id)) == 1
    assert len(await store.documents.list_by_owner(actors.client.id)) == 1
    assert notifier.notify.await_count == 1


async def test_open_request_for_deleted_document_is_replaced(coordinator, store, actors) -> None:
    first = await coordinator.request_document(actors.staff, actors.client.id, "photo")
    await store.documents.delete(first.document.id)

    second = await coordinator.request_document(actors.staff, actors.client.id, "photo")

    assert second.created is True
    assert second.document.id != first.document.id
    stale = await store.requests.get_by_id(first.request.id)
    assert stale.status == RequestStatus.CANCELLED
