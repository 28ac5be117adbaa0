"""Domain exceptions for the certification workflow.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class CaseworkException(Exception):
    """Base exception for all Casework application errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the canonical error envelope."""
        return {
            "errorKind": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(CaseworkException):
    """Raised when input validation fails (e.g. invalid format or range)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class ResourceNotFoundException(CaseworkException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'document', 'quote').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class ForbiddenException(CaseworkException):
    """Raised when the actor's role (or ownership) does not allow the operation."""

    def __init__(self, role: str, action: str, reason: str | None = None) -> None:
        """Initialize with the offending role and the attempted action.

        Args:
            role: Role of the actor that attempted the action.
            action: Action that was attempted (e.g. 'APPROVE', 'publish_quote').
            reason: Optional extra explanation (e.g. ownership mismatch).
        """
        message = reason or f"Role {role} may not perform {action}"
        super().__init__(message, "FORBIDDEN", {"role": role, "action": action})


class InvalidTransitionException(CaseworkException):
    """Raised when a document status transition is not allowed from its current state."""

    def __init__(
        self,
        document_id: str,
        current_status: str,
        attempted: str,
        reason: str | None = None,
    ) -> None:
        """Initialize with the document, current status and attempted action or target.

        Args:
            document_id: Document the transition was attempted on.
            current_status: Status the document is in.
            attempted: Attempted action or target status.
            reason: Optional human-readable reason (e.g. ordering violation).
        """
        message = f"Cannot apply {attempted} to document in status {current_status}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(
            message,
            "INVALID_TRANSITION",
            {
                "document_id": document_id,
                "current_status": current_status,
                "attempted": attempted,
            },
        )


class InvalidStateException(CaseworkException):
    """Raised when a quote or document is not in the state an operation requires."""

    def __init__(
        self,
        resource_type: str,
        resource_id: str,
        current_status: str,
        expected: list[str],
        reason: str | None = None,
    ) -> None:
        super().__init__(
            reason
            or f"{resource_type} {resource_id} is {current_status}; expected one of {expected}",
            "INVALID_STATE",
            {
                "resource_type": resource_type,
                "resource_id": resource_id,
                "current_status": current_status,
                "expected": expected,
            },
        )


class MissingRejectionReasonException(CaseworkException):
    """Raised when a rejection is attempted without a reason."""

    def __init__(self, document_id: str) -> None:
        super().__init__(
            "A rejection reason is required",
            "MISSING_REJECTION_REASON",
            {"document_id": document_id},
        )


class InvalidAmountException(CaseworkException):
    """Raised when a monetary amount or percentage is out of range."""

    def __init__(self, field: str, value: Any) -> None:
        super().__init__(
            f"Invalid amount for {field}: {value}",
            "INVALID_AMOUNT",
            {"field": field, "value": str(value)},
        )


class QuoteAlreadyActiveException(CaseworkException):
    """Raised when a quote is requested while another is still open for the same document and kind."""

    def __init__(self, document_id: str, kind: str, active_quote_id: str) -> None:
        super().__init__(
            f"An open {kind} quote already exists for document {document_id}",
            "QUOTE_ALREADY_ACTIVE",
            {
                "document_id": document_id,
                "kind": kind,
                "active_quote_id": active_quote_id,
            },
        )


class ConflictException(CaseworkException):
    """Raised when a concurrent request won the version check (optimistic lock); retry."""

    def __init__(self, resource_type: str, resource_id: str, expected_version: int) -> None:
        super().__init__(
            f"{resource_type} was updated by another request; retry.",
            "CONFLICT",
            {
                "resource_type": resource_type,
                "resource_id": resource_id,
                "expected_version": expected_version,
            },
        )


class DuplicateRecordException(CaseworkException):
    """Raised when a create loses to a concurrent insert of the same unique key."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        super().__init__(
            f"A matching {resource_type} was created by another request; retry.",
            "CONFLICT",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class SqlNotConfiguredException(CaseworkException):
    """Raised when an operation requires Postgres but the backend is not configured."""

    def __init__(self) -> None:
        super().__init__(
            message="This operation requires a SQL database that is not configured.",
            error_code="SERVICE_UNAVAILABLE",
        )
