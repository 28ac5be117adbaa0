"""Service interfaces (ports) for the application layer.

Protocols define contracts for external collaborators: blob storage,
notification delivery and payment checkout.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from casework.application.dtos.quote import CheckoutSession


# Blob storage interface
class IStorageService(Protocol):
    """Protocol for file content storage. The core only keeps the returned ref."""

    async def store(self, content: bytes, path: str, content_type: str) -> str:
        """Store bytes under path and return an opaque storage ref."""

    async def get_public_url(self, storage_ref: str) -> str:
        """Return a URL the client can use to fetch the file."""

    async def delete(self, storage_ref: str) -> bool:
        """Delete the file. Returns True if it existed."""


# Notification interface
class INotificationService(Protocol):
    """Protocol for notification delivery (email/SMS live outside the core)."""

    async def notify(
        self,
        target_id: str,
        message: str,
        deadline: datetime | None = None,
    ) -> None:
        """Send a notification. Raises on delivery failure; callers treat that as non-fatal."""


# Payment interface
class IPaymentGateway(Protocol):
    """Protocol for starting a checkout; capture happens outside the core."""

    async def create_checkout(
        self,
        document_id: str,
        quote_id: str,
        final_price: Decimal,
    ) -> CheckoutSession:
        """Create a checkout session for an approved quote."""
