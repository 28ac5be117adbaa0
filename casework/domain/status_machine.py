"""DocumentStatus state machine for the certification lifecycle.

Explicit transition table keyed by (from_status, action, certification kind).
Certification-specific actions carry the kind; plain review actions use None.
Role permissions per action live next to the table so both are reviewed
together.
"""

from casework.domain.enums import (
    ActorRole,
    CertificationKind,
    DocumentAction,
    DocumentStatus,
)

_APOSTILLE = CertificationKind.APOSTILLE
_TRANSLATION = CertificationKind.TRANSLATION

TransitionKey = tuple[DocumentStatus, DocumentAction, CertificationKind | None]

# Every status a REJECT may start from. APPROVED is additionally guarded by the
# engine: a fully complete document is terminal.
REJECTABLE_STATUSES: tuple[DocumentStatus, ...] = (
    DocumentStatus.REQUESTED,
    DocumentStatus.ANALYZING,
    DocumentStatus.APPROVED,
    DocumentStatus.WAITING_APOSTILLE,
    DocumentStatus.ANALYZING_APOSTILLE,
    DocumentStatus.WAITING_TRANSLATION,
    DocumentStatus.ANALYZING_TRANSLATION,
)

ALLOWED_TRANSITIONS: dict[TransitionKey, DocumentStatus] = {
    # Client upload / replacement
    (DocumentStatus.REQUESTED, DocumentAction.UPLOAD, None): DocumentStatus.ANALYZING,
    (DocumentStatus.ANALYZING, DocumentAction.UPLOAD, None): DocumentStatus.ANALYZING,
    (DocumentStatus.REJECTED, DocumentAction.UPLOAD, None): DocumentStatus.ANALYZING,
    (DocumentStatus.APPROVED, DocumentAction.UPLOAD, None): DocumentStatus.ANALYZING,
    # Client supplies an already certified copy
    (DocumentStatus.WAITING_APOSTILLE, DocumentAction.UPLOAD, None): DocumentStatus.ANALYZING_APOSTILLE,
    (DocumentStatus.WAITING_TRANSLATION, DocumentAction.UPLOAD, None): DocumentStatus.ANALYZING_TRANSLATION,
    # Initial review
    (DocumentStatus.ANALYZING, DocumentAction.APPROVE, None): DocumentStatus.APPROVED,
    # Certification chain
    (DocumentStatus.APPROVED, DocumentAction.REQUEST_CERTIFICATION, _APOSTILLE): DocumentStatus.WAITING_APOSTILLE,
    (DocumentStatus.APPROVED, DocumentAction.REQUEST_CERTIFICATION, _TRANSLATION): DocumentStatus.WAITING_TRANSLATION,
    (DocumentStatus.WAITING_APOSTILLE, DocumentAction.START_CERTIFICATION, _APOSTILLE): DocumentStatus.ANALYZING_APOSTILLE,
    (DocumentStatus.WAITING_TRANSLATION, DocumentAction.START_CERTIFICATION, _TRANSLATION): DocumentStatus.ANALYZING_TRANSLATION,
    (DocumentStatus.ANALYZING_APOSTILLE, DocumentAction.COMPLETE_CERTIFICATION, _APOSTILLE): DocumentStatus.APPROVED,
    (DocumentStatus.ANALYZING_TRANSLATION, DocumentAction.COMPLETE_CERTIFICATION, _TRANSLATION): DocumentStatus.APPROVED,
    # Client declined the quote: back to waiting for that step
    (DocumentStatus.ANALYZING_APOSTILLE, DocumentAction.DECLINE_QUOTE, _APOSTILLE): DocumentStatus.WAITING_APOSTILLE,
    (DocumentStatus.ANALYZING_TRANSLATION, DocumentAction.DECLINE_QUOTE, _TRANSLATION): DocumentStatus.WAITING_TRANSLATION,
    **{
        (status, DocumentAction.REJECT, None): DocumentStatus.REJECTED
        for status in REJECTABLE_STATUSES
    },
}

ACTION_ROLES: dict[DocumentAction, frozenset[ActorRole]] = {
    DocumentAction.UPLOAD: frozenset({ActorRole.CLIENT}),
    DocumentAction.APPROVE: frozenset({ActorRole.STAFF}),
    DocumentAction.REJECT: frozenset({ActorRole.STAFF}),
    DocumentAction.REQUEST_CERTIFICATION: frozenset({ActorRole.STAFF}),
    DocumentAction.START_CERTIFICATION: frozenset({ActorRole.STAFF}),
    DocumentAction.COMPLETE_CERTIFICATION: frozenset({ActorRole.STAFF, ActorRole.SYSTEM}),
    DocumentAction.DECLINE_QUOTE: frozenset({ActorRole.CLIENT}),
}


def resolve_transition(
    from_status: DocumentStatus,
    action: DocumentAction,
    kind: CertificationKind | None = None,
) -> DocumentStatus | None:
    """Return the target status for an action, or None when the table has no entry.

    Example:
        >>> resolve_transition(DocumentStatus.ANALYZING, DocumentAction.APPROVE)
        <DocumentStatus.APPROVED: 'APPROVED'>
        >>> resolve_transition(DocumentStatus.ANALYZING, DocumentAction.START_CERTIFICATION,
        ...                    CertificationKind.TRANSLATION) is None
        True
    """
    return ALLOWED_TRANSITIONS.get((from_status, action, kind))


def history_stage(
    from_status: DocumentStatus | None,
    action: DocumentAction,
    kind: CertificationKind | None,
) -> str:
    """Name of the workflow stage a transition belongs to (for the timeline)."""
    if action == DocumentAction.UPLOAD:
        return "submission"
    effective_kind = kind or (from_status.certification_kind if from_status else None)
    if effective_kind is None:
        return "review"
    return effective_kind.value.lower()
