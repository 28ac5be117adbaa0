"""Quote domain entity: a priced offer for apostille or translation work."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from casework.domain.enums import CertificationKind, QuoteStatus


@dataclass(frozen=True)
class QuoteEntity:
    """Domain entity for a certification quote.

    final_price is only ever set from base_cost and markup_percent via
    casework.domain.pricing.compute_final_price.
    """

    id: str
    document_id: str
    kind: CertificationKind
    status: QuoteStatus
    created_at: datetime
    updated_at: datetime
    base_cost: Decimal | None = None
    markup_percent: Decimal | None = None
    final_price: Decimal | None = None
    deadline: date | None = None
    vendor_notes: str | None = None
    requested_by: str | None = None
    quoted_by: str | None = None
    published_by: str | None = None
    decided_by: str | None = None
    rejection_reason: str | None = None
    payment_reference: str | None = None
    idempotency_key: str | None = None
    version: int = 1

    @property
    def is_active(self) -> bool:
        """Non-terminal quotes count against the one-open-quote-per-kind rule."""
        return not self.status.is_terminal

    @property
    def is_locked(self) -> bool:
        """Pricing inputs can no longer change once the client approved."""
        return self.status in (
            QuoteStatus.APPROVED,
            QuoteStatus.PAID,
            QuoteStatus.REJECTED,
            QuoteStatus.CANCELLED,
        )
