"""Tests for the document transition table and role table."""

import pytest

from casework.domain.enums import ActorRole, CertificationKind, DocumentAction, DocumentStatus
from casework.domain.status_machine import (
    ACTION_ROLES,
    ALLOWED_TRANSITIONS,
    history_stage,
    resolve_transition,
)

APOSTILLE = CertificationKind.APOSTILLE
TRANSLATION = CertificationKind.TRANSLATION


@pytest.mark.parametrize(
    ("from_status", "action", "kind", "expected"),
    [
        (DocumentStatus.REQUESTED, DocumentAction.UPLOAD, None, DocumentStatus.ANALYZING),
        (DocumentStatus.REJECTED, DocumentAction.UPLOAD, None, DocumentStatus.ANALYZING),
        (DocumentStatus.ANALYZING, DocumentAction.APPROVE, None, DocumentStatus.APPROVED),
        (DocumentStatus.APPROVED, DocumentAction.REQUEST_CERTIFICATION, APOSTILLE, DocumentStatus.WAITING_APOSTILLE),
        (DocumentStatus.WAITING_TRANSLATION, DocumentAction.START_CERTIFICATION, TRANSLATION, DocumentStatus.ANALYZING_TRANSLATION),
        (DocumentStatus.ANALYZING_APOSTILLE, DocumentAction.COMPLETE_CERTIFICATION, APOSTILLE, DocumentStatus.APPROVED),
        (DocumentStatus.ANALYZING_TRANSLATION, DocumentAction.DECLINE_QUOTE, TRANSLATION, DocumentStatus.WAITING_TRANSLATION),
        (DocumentStatus.WAITING_APOSTILLE, DocumentAction.UPLOAD, None, DocumentStatus.ANALYZING_APOSTILLE),
    ],
)
def test_resolve_transition_allowed(from_status, action, kind, expected) -> None:
    assert resolve_transition(from_status, action, kind) == expected


def test_kind_must_match_status() -> None:
    """Starting translation on a document waiting for apostille is not in the table."""
    assert resolve_transition(
        DocumentStatus.WAITING_APOSTILLE, DocumentAction.START_CERTIFICATION, TRANSLATION
    ) is None
    assert resolve_transition(
        DocumentStatus.ANALYZING_APOSTILLE, DocumentAction.COMPLETE_CERTIFICATION, TRANSLATION
    ) is None


def test_upload_blocked_while_certification_is_analyzed() -> None:
    assert resolve_transition(DocumentStatus.ANALYZING_APOSTILLE, DocumentAction.UPLOAD) is None
    assert resolve_transition(DocumentStatus.ANALYZING_TRANSLATION, DocumentAction.UPLOAD) is None


def test_rejected_only_leaves_via_upload() -> None:
    actions = [
        (action, kind)
        for (status, action, kind) in ALLOWED_TRANSITIONS
        if status == DocumentStatus.REJECTED
    ]
    assert actions == [(DocumentAction.UPLOAD, None)]


def test_every_non_rejected_status_can_be_rejected() -> None:
    for status in DocumentStatus:
        expected = status != DocumentStatus.REJECTED
        assert (resolve_transition(status, DocumentAction.REJECT) is not None) is expected


def test_no_transition_targets_requested() -> None:
    assert DocumentStatus.REQUESTED not in ALLOWED_TRANSITIONS.values()


@pytest.mark.parametrize(
    ("action", "role", "allowed"),
    [
        (DocumentAction.UPLOAD, ActorRole.CLIENT, True),
        (DocumentAction.UPLOAD, ActorRole.STAFF, False),
        (DocumentAction.APPROVE, ActorRole.STAFF, True),
        (DocumentAction.APPROVE, ActorRole.CLIENT, False),
        (DocumentAction.REJECT, ActorRole.FINANCE, False),
        (DocumentAction.COMPLETE_CERTIFICATION, ActorRole.SYSTEM, True),
        (DocumentAction.COMPLETE_CERTIFICATION, ActorRole.VENDOR, False),
        (DocumentAction.DECLINE_QUOTE, ActorRole.CLIENT, True),
    ],
)
def test_role_table(action, role, allowed) -> None:
    assert (role in ACTION_ROLES[action]) is allowed


def test_history_stage_names() -> None:
    assert history_stage(None, DocumentAction.UPLOAD, None) == "submission"
    assert history_stage(DocumentStatus.ANALYZING, DocumentAction.APPROVE, None) == "review"
    assert (
        history_stage(DocumentStatus.APPROVED, DocumentAction.REQUEST_CERTIFICATION, TRANSLATION)
        == "translation"
    )
    assert (
        history_stage(DocumentStatus.ANALYZING_APOSTILLE, DocumentAction.REJECT, None)
        == "apostille"
    )
