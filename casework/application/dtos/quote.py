"""DTOs for the quote negotiation flow."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass(frozen=True)
class CheckoutSession:
    """Checkout handed back by the payment collaborator for an approved quote."""

    checkout_id: str
    document_id: str
    quote_id: str
    amount: Decimal
    checkout_url: str
    created_at: datetime
