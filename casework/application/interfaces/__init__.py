"""Application interfaces (ports): repository and service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from casework.infrastructure or casework.api.
"""

from casework.application.interfaces.repositories import (
    IDocumentHistoryRepository,
    IDocumentRepository,
    IQuoteRepository,
    IRequirementRequestRepository,
)
from casework.application.interfaces.services import (
    INotificationService,
    IPaymentGateway,
    IStorageService,
)

__all__ = [
    "IDocumentHistoryRepository",
    "IDocumentRepository",
    "INotificationService",
    "IPaymentGateway",
    "IQuoteRepository",
    "IRequirementRequestRepository",
    "IStorageService",
]
