"""Payment checkout: log-only gateway (capture happens outside the service)."""

from __future__ import annotations

import hashlib
from decimal import Decimal

from casework.application.dtos.quote import CheckoutSession
from casework.shared.telemetry.logging import get_logger
from casework.shared.utils.datetime import utc_now

logger = get_logger(__name__)


class LogOnlyPaymentGateway:
    """IPaymentGateway implementation that logs and returns a deterministic checkout.

    The checkout id depends only on (document_id, quote_id, final_price), so
    retries return the same session. The payment provider later calls
    POST /quotes/{id}/payment-confirmation.
    """

    def __init__(self, checkout_base_url: str = "/checkout") -> None:
        self.checkout_base_url = checkout_base_url.rstrip("/")

    async def create_checkout(
        self,
        document_id: str,
        quote_id: str,
        final_price: Decimal,
    ) -> CheckoutSession:
        digest = hashlib.sha256(
            f"{document_id}:{quote_id}:{final_price}".encode()
        ).hexdigest()[:24]
        checkout_id = f"chk_{digest}"
        logger.info(
            "Checkout %s: would charge %s for quote %s (document %s)",
            checkout_id,
            final_price,
            quote_id,
            document_id,
        )
        return CheckoutSession(
            checkout_id=checkout_id,
            document_id=document_id,
            quote_id=quote_id,
            amount=final_price,
            checkout_url=f"{self.checkout_base_url}/{checkout_id}",
            created_at=utc_now(),
        )
