"""Quote negotiation: vendor quote -> finance markup -> client approval -> payment.

Shared by apostille and translation. At most one non-terminal quote exists
per (document, kind). Pricing defaults arrive as a PricingConfig snapshot
and are never read from settings here.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import replace
from datetime import date, datetime
from decimal import Decimal
from typing import Any

from casework.application.dtos.quote import CheckoutSession
from casework.application.interfaces.repositories import IQuoteRepository
from casework.application.interfaces.services import IPaymentGateway
from casework.application.services.authorization import require_owner, require_role
from casework.application.services.status_engine import DocumentStatusEngine
from casework.domain.entities import Actor, DocumentEntity, QuoteEntity
from casework.domain.enums import ActorRole, CertificationKind, DocumentStatus, QuoteStatus
from casework.domain.exceptions import (
    InvalidAmountException,
    InvalidStateException,
    MissingRejectionReasonException,
    QuoteAlreadyActiveException,
    ResourceNotFoundException,
)
from casework.domain.pricing import PricingConfig, compute_final_price, to_decimal
from casework.shared.telemetry.logging import get_logger
from casework.shared.utils.datetime import utc_now
from casework.shared.utils.generators import generate_cuid

logger = get_logger(__name__)


def _require_status(quote: QuoteEntity, *allowed: QuoteStatus) -> None:
    if quote.status not in allowed:
        raise InvalidStateException(
            "quote", quote.id, quote.status.value, [s.value for s in allowed]
        )


class QuoteNegotiationService:
    """Drives the quote lifecycle and couples it back into the status engine."""

    def __init__(
        self,
        quote_repo: IQuoteRepository,
        status_engine: DocumentStatusEngine,
        payment_gateway: IPaymentGateway,
        pricing: PricingConfig | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._quotes = quote_repo
        self._engine = status_engine
        self._payments = payment_gateway
        self._pricing = pricing or PricingConfig()
        self._clock = clock

    # Reads

    async def get_quote(self, quote_id: str, actor: Actor | None = None) -> QuoteEntity:
        quote = await self._quotes.get_by_id(quote_id)
        if quote is None:
            raise ResourceNotFoundException("quote", quote_id)
        if actor is not None and actor.role == ActorRole.CLIENT:
            await self._engine.get_document(quote.document_id, actor)
        return quote

    async def get_active_quote(
        self, document_id: str, kind: CertificationKind
    ) -> QuoteEntity | None:
        """Return the single non-terminal quote for (document, kind), or None."""
        return await self._quotes.get_active(document_id, kind)

    async def list_quotes_for_document(self, document_id: str) -> list[QuoteEntity]:
        return await self._quotes.list_by_document(document_id)

    async def list_quotes_by_status(self, status: QuoteStatus) -> list[QuoteEntity]:
        """Work queues: finance looks at QUOTED, vendors at AWAITING_VENDOR_QUOTE."""
        return await self._quotes.list_by_status(status)

    # Staff

    async def request_quote(
        self,
        actor: Actor,
        document_id: str,
        kind: CertificationKind,
        idempotency_key: str | None = None,
        supersede: bool = False,
        pricing: PricingConfig | None = None,
    ) -> QuoteEntity:
        """Open a quote for a document waiting on `kind` and move it to ANALYZING_<kind>.

        A retry carrying the idempotency key of the active quote returns that
        quote. Any other request while a quote is active fails with
        QuoteAlreadyActiveException unless supersede is set, which cancels the
        active quote and issues a fresh one.
        """
        require_role(actor, (ActorRole.STAFF,), "REQUEST_QUOTE")
        document = await self._engine.get_document(document_id)
        active = await self._quotes.get_active(document_id, kind)
        if active is not None:
            if idempotency_key and active.idempotency_key == idempotency_key:
                return active
            if not supersede:
                raise QuoteAlreadyActiveException(document_id, kind.value, active.id)
            await self._save(active, status=QuoteStatus.CANCELLED)
            logger.info("Quote %s superseded", active.id)
            if document.status != DocumentStatus.analyzing_for(kind):
                document = await self._start_analysis(actor, document, kind)
        else:
            document = await self._start_analysis(actor, document, kind)

        cfg = pricing or self._pricing
        now = self._clock()
        quote = QuoteEntity(
            id=generate_cuid(),
            document_id=document.id,
            kind=kind,
            status=QuoteStatus.AWAITING_VENDOR_QUOTE,
            created_at=now,
            updated_at=now,
            requested_by=actor.id,
            idempotency_key=idempotency_key,
        )
        if kind == CertificationKind.APOSTILLE and cfg.default_apostille_price is not None:
            quote = replace(
                quote,
                status=QuoteStatus.QUOTED,
                base_cost=cfg.default_apostille_price,
                quoted_by=actor.id,
            )
        created = await self._quotes.create(quote)
        logger.info(
            "Quote %s requested for document %s (kind=%s, status=%s)",
            created.id,
            document.id,
            kind.value,
            created.status.value,
        )
        return created

    # Vendor

    async def submit_vendor_quote(
        self,
        actor: Actor,
        quote_id: str,
        base_cost: Any,
        deadline: date | None = None,
        notes: str | None = None,
    ) -> QuoteEntity:
        """AWAITING_VENDOR_QUOTE -> QUOTED. base_cost must be > 0."""
        require_role(actor, (ActorRole.VENDOR,), "SUBMIT_VENDOR_QUOTE")
        quote = await self.get_quote(quote_id)
        _require_status(quote, QuoteStatus.AWAITING_VENDOR_QUOTE)
        cost = to_decimal(base_cost, "base_cost")
        if cost <= 0:
            raise InvalidAmountException("base_cost", base_cost)
        return await self._save(
            quote,
            status=QuoteStatus.QUOTED,
            base_cost=cost,
            deadline=deadline,
            vendor_notes=notes,
            quoted_by=actor.id,
        )

    # Finance

    async def apply_markup_and_publish(
        self,
        actor: Actor,
        quote_id: str,
        markup_percent: Any = None,
        pricing: PricingConfig | None = None,
    ) -> QuoteEntity:
        """Compute final_price and offer the quote to the client.

        Re-publishing an AWAITING_CLIENT_APPROVAL quote recomputes the price
        on the same record.
        """
        require_role(actor, (ActorRole.FINANCE,), "PUBLISH_QUOTE")
        quote = await self.get_quote(quote_id)
        publishable = [QuoteStatus.QUOTED.value, QuoteStatus.AWAITING_CLIENT_APPROVAL.value]
        if quote.is_locked:
            raise InvalidStateException(
                "quote",
                quote.id,
                quote.status.value,
                publishable,
                reason=f"Quote {quote.id} is {quote.status.value}; its price is locked",
            )
        _require_status(quote, QuoteStatus.QUOTED, QuoteStatus.AWAITING_CLIENT_APPROVAL)
        cfg = pricing or self._pricing
        markup = (
            cfg.default_markup_percent
            if markup_percent is None
            else to_decimal(markup_percent, "markup_percent")
        )
        if markup < 0:
            raise InvalidAmountException("markup_percent", markup_percent)
        if quote.base_cost is None:
            raise InvalidStateException(
                "quote", quote.id, quote.status.value, [QuoteStatus.QUOTED.value],
                reason=f"Quote {quote.id} has no base cost",
            )
        final_price = compute_final_price(quote.base_cost, markup, cfg.quantum)
        published = await self._save(
            quote,
            status=QuoteStatus.AWAITING_CLIENT_APPROVAL,
            markup_percent=markup,
            final_price=final_price,
            published_by=actor.id,
        )
        logger.info(
            "Quote %s published (markup=%s, final_price=%s)",
            published.id,
            markup,
            final_price,
        )
        return published

    # Client

    async def client_approve(self, actor: Actor, quote_id: str) -> QuoteEntity:
        """AWAITING_CLIENT_APPROVAL -> APPROVED. Unlocks checkout; the document is unchanged."""
        quote, _ = await self._client_quote(actor, quote_id, "APPROVE_QUOTE")
        _require_status(quote, QuoteStatus.AWAITING_CLIENT_APPROVAL)
        return await self._save(quote, status=QuoteStatus.APPROVED, decided_by=actor.id)

    async def client_reject(
        self, actor: Actor, quote_id: str, reason: str | None
    ) -> QuoteEntity:
        """Decline the quote (terminal); the document goes back to WAITING_<kind>."""
        quote, document = await self._client_quote(actor, quote_id, "REJECT_QUOTE")
        _require_status(quote, QuoteStatus.AWAITING_CLIENT_APPROVAL)
        if not reason or not reason.strip():
            raise MissingRejectionReasonException(document.id)
        await self._engine.decline_quote(
            actor, document.id, quote.kind, note=f"quote declined: {reason.strip()}"
        )
        return await self._save(
            quote,
            status=QuoteStatus.REJECTED,
            rejection_reason=reason.strip(),
            decided_by=actor.id,
        )

    async def start_checkout(self, actor: Actor, quote_id: str) -> CheckoutSession:
        """Hand an APPROVED quote's price to the payment collaborator."""
        quote, document = await self._client_quote(actor, quote_id, "CHECKOUT")
        _require_status(quote, QuoteStatus.APPROVED)
        session = await self._payments.create_checkout(
            document.id, quote.id, quote.final_price or Decimal(0)
        )
        logger.info("Checkout %s started for quote %s", session.checkout_id, quote.id)
        return session

    # Payment callback

    async def confirm_payment(
        self, actor: Actor, quote_id: str, payment_reference: str
    ) -> QuoteEntity:
        """Complete the document's certification step, then mark the quote PAID.

        The document must still be ANALYZING_<kind>; otherwise nothing is written.

        A repeated callback for a PAID quote returns it unchanged.
        """
        require_role(actor, (ActorRole.SYSTEM,), "CONFIRM_PAYMENT")
        quote = await self.get_quote(quote_id)
        if quote.status == QuoteStatus.PAID:
            logger.info("Quote %s already paid; ignoring repeated callback", quote.id)
            return quote
        _require_status(quote, QuoteStatus.APPROVED)
        document = await self._engine.get_document(quote.document_id)
        expected = DocumentStatus.analyzing_for(quote.kind)
        if document.status != expected:
            raise InvalidStateException(
                "document", document.id, document.status.value, [expected.value]
            )
        await self._engine.complete_certification(
            actor, document.id, quote.kind, note=f"payment {payment_reference}"
        )
        return await self._save(
            quote, status=QuoteStatus.PAID, payment_reference=payment_reference
        )

    # Internals

    async def _start_analysis(
        self, actor: Actor, document: DocumentEntity, kind: CertificationKind
    ) -> DocumentEntity:
        expected = DocumentStatus.waiting_for(kind)
        if document.status != expected:
            raise InvalidStateException(
                "document", document.id, document.status.value, [expected.value]
            )
        return await self._engine.start_certification(
            actor, document.id, kind, note="quote requested"
        )

    async def _client_quote(
        self, actor: Actor, quote_id: str, action: str
    ) -> tuple[QuoteEntity, DocumentEntity]:
        require_role(actor, (ActorRole.CLIENT,), action)
        quote = await self.get_quote(quote_id)
        document = await self._engine.get_document(quote.document_id)
        require_owner(actor, document, action)
        return quote, document

    async def _save(self, quote: QuoteEntity, **changes: Any) -> QuoteEntity:
        updated = replace(quote, updated_at=self._clock(), **changes)
        return await self._quotes.update(updated, expected_version=quote.version)

