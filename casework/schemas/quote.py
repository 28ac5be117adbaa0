"""Quote API schemas."""

from datetime import date, datetime
from decimal import Decimal
from typing import Literal

from pydantic import Field

from casework.domain.enums import CertificationKind, QuoteStatus
from casework.schemas.common import CamelModel


class QuoteResponse(CamelModel):
    id: str
    document_id: str
    kind: CertificationKind
    status: QuoteStatus
    base_cost: Decimal | None = None
    markup_percent: Decimal | None = None
    final_price: Decimal | None = None
    deadline: date | None = None
    vendor_notes: str | None = None
    rejection_reason: str | None = None
    payment_reference: str | None = None
    created_at: datetime
    updated_at: datetime
    version: int


class QuoteRequestCreate(CamelModel):
    """Request body for POST /documents/{id}/quotes (staff)."""

    kind: CertificationKind
    idempotency_key: str | None = Field(default=None, max_length=128)
    supersede: bool = False


class VendorQuoteSubmit(CamelModel):
    """Request body for POST /quotes/{id}/vendor-quote.

    Amounts arrive as JSON numbers or strings and are kept as Decimal. A string
    that is not a number passes through and the quote service reports it as
    INVALID_AMOUNT.
    """

    base_cost: Decimal | str
    deadline: date | None = None
    notes: str | None = Field(default=None, max_length=2000)


class QuoteAction(CamelModel):
    """Request body for PATCH /quotes/{id}."""

    action: Literal["publish", "approve", "reject"]
    markup_percent: Decimal | str | None = None
    reason: str | None = Field(default=None, max_length=2000)


class PaymentConfirmation(CamelModel):
    payment_reference: str = Field(..., min_length=1, max_length=255)


class CheckoutResponse(CamelModel):
    checkout_id: str
    document_id: str
    quote_id: str
    amount: Decimal
    checkout_url: str
    created_at: datetime
