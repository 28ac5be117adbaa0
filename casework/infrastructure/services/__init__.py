"""Infrastructure services: log-only notifier and payment gateway."""

from casework.infrastructure.services.notification_service import (
    LogOnlyNotificationService,
)
from casework.infrastructure.services.payment_gateway import LogOnlyPaymentGateway

__all__ = [
    "LogOnlyNotificationService",
    "LogOnlyPaymentGateway",
]
