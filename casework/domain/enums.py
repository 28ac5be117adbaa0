"""Domain enumerations for the certification workflow.

Enums represent fixed sets of domain values: persisted document and quote
statuses, certification kinds, actor roles and the derived Stage shown to
every actor.
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class CertificationKind(_ValuesMixin, str, Enum):
    """Certification step a document may have to go through."""

    APOSTILLE = "APOSTILLE"
    TRANSLATION = "TRANSLATION"


class DocumentStatus(_ValuesMixin, str, Enum):
    """Persisted workflow position of a single document.

    State flow:
    REQUESTED → ANALYZING → REJECTED | APPROVED
    APPROVED → WAITING_APOSTILLE → ANALYZING_APOSTILLE → APPROVED
    APPROVED → WAITING_TRANSLATION → ANALYZING_TRANSLATION → APPROVED
    """

    REQUESTED = "REQUESTED"  # Placeholder created by staff, no file yet
    ANALYZING = "ANALYZING"  # Initial technical review
    REJECTED = "REJECTED"
    APPROVED = "APPROVED"
    WAITING_APOSTILLE = "WAITING_APOSTILLE"
    ANALYZING_APOSTILLE = "ANALYZING_APOSTILLE"
    WAITING_TRANSLATION = "WAITING_TRANSLATION"
    ANALYZING_TRANSLATION = "ANALYZING_TRANSLATION"

    @classmethod
    def waiting_for(cls, kind: CertificationKind) -> "DocumentStatus":
        """Return the WAITING_* status for a certification kind."""
        return cls(f"WAITING_{kind.value}")

    @classmethod
    def analyzing_for(cls, kind: CertificationKind) -> "DocumentStatus":
        """Return the ANALYZING_* status for a certification kind."""
        return cls(f"ANALYZING_{kind.value}")

    @property
    def certification_kind(self) -> CertificationKind | None:
        """Certification kind of a WAITING_*/ANALYZING_* status, else None."""
        for kind in CertificationKind:
            if self in (DocumentStatus.waiting_for(kind), DocumentStatus.analyzing_for(kind)):
                return kind
        return None


class DocumentAction(_ValuesMixin, str, Enum):
    """Actions that drive the document state machine."""

    UPLOAD = "UPLOAD"
    APPROVE = "APPROVE"
    REJECT = "REJECT"
    REQUEST_CERTIFICATION = "REQUEST_CERTIFICATION"
    START_CERTIFICATION = "START_CERTIFICATION"
    COMPLETE_CERTIFICATION = "COMPLETE_CERTIFICATION"
    DECLINE_QUOTE = "DECLINE_QUOTE"


class ActorRole(_ValuesMixin, str, Enum):
    """Who is performing an operation."""

    CLIENT = "CLIENT"
    STAFF = "STAFF"  # legal team
    VENDOR = "VENDOR"  # translator / apostille provider
    FINANCE = "FINANCE"
    SYSTEM = "SYSTEM"  # payment callback and other machine actors


class QuoteStatus(_ValuesMixin, str, Enum):
    """Quote lifecycle status.

    AWAITING_VENDOR_QUOTE → QUOTED → AWAITING_CLIENT_APPROVAL → APPROVED → PAID
    REJECTED (client declined) and CANCELLED (superseded) are terminal.
    """

    AWAITING_VENDOR_QUOTE = "AWAITING_VENDOR_QUOTE"
    QUOTED = "QUOTED"
    AWAITING_CLIENT_APPROVAL = "AWAITING_CLIENT_APPROVAL"
    APPROVED = "APPROVED"
    PAID = "PAID"
    REJECTED = "REJECTED"
    CANCELLED = "CANCELLED"

    @property
    def is_terminal(self) -> bool:
        return self in (QuoteStatus.PAID, QuoteStatus.REJECTED, QuoteStatus.CANCELLED)


class RequestStatus(_ValuesMixin, str, Enum):
    """Requirement request status."""

    OPEN = "OPEN"
    FULFILLED = "FULFILLED"
    CANCELLED = "CANCELLED"  # document deleted before it was supplied


class NotificationStatus(_ValuesMixin, str, Enum):
    """Outcome of the notification side effect of a requirement request."""

    NOT_REQUESTED = "NOT_REQUESTED"
    SENT = "SENT"
    FAILED = "FAILED"


class Stage(_ValuesMixin, str, Enum):
    """Actor-facing stage derived from a document, its requirement and quote."""

    MISSING = "MISSING"
    REQUESTED = "REQUESTED"
    REJECTED = "REJECTED"
    ANALYZING = "ANALYZING"
    WAITING_APOSTILLE = "WAITING_APOSTILLE"
    ANALYZING_APOSTILLE = "ANALYZING_APOSTILLE"
    WAITING_TRANSLATION = "WAITING_TRANSLATION"
    ANALYZING_TRANSLATION = "ANALYZING_TRANSLATION"
    WAITING_QUOTE_APPROVAL = "WAITING_QUOTE_APPROVAL"
    COMPLETED = "COMPLETED"
