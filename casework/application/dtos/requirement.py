"""DTOs for requirement requests."""

from dataclasses import dataclass

from casework.domain.entities import DocumentEntity, RequirementRequestEntity


@dataclass(frozen=True)
class RequirementRequestOutcome:
    """Result of request_document.

    created is False when an open request for the same key already existed.
    notified is True only when a notification was dispatched successfully.
    """

    request: RequirementRequestEntity
    document: DocumentEntity
    created: bool
    notified: bool
