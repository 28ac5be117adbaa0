"""Quote API: vendor, finance, client and payment steps of the negotiation."""

from fastapi import APIRouter, Query

from casework.api.v1.dependencies import CurrentActor, QuoteServiceDep
from casework.application.services.authorization import require_role
from casework.domain.enums import ActorRole, QuoteStatus
from casework.schemas.quote import (
    CheckoutResponse,
    PaymentConfirmation,
    QuoteAction,
    QuoteResponse,
    VendorQuoteSubmit,
)

router = APIRouter()


@router.get("", response_model=list[QuoteResponse])
async def list_quotes(
    actor: CurrentActor,
    quotes: QuoteServiceDep,
    status: QuoteStatus = Query(...),
):
    """Work queue by status (vendors: AWAITING_VENDOR_QUOTE, finance: QUOTED)."""
    require_role(
        actor,
        (ActorRole.STAFF, ActorRole.VENDOR, ActorRole.FINANCE),
        "LIST_QUOTES",
    )
    return [QuoteResponse.model_validate(q) for q in await quotes.list_quotes_by_status(status)]


@router.get("/{quote_id}", response_model=QuoteResponse)
async def get_quote(quote_id: str, actor: CurrentActor, quotes: QuoteServiceDep):
    return QuoteResponse.model_validate(await quotes.get_quote(quote_id, actor))


@router.post("/{quote_id}/vendor-quote", response_model=QuoteResponse)
async def submit_vendor_quote(
    quote_id: str,
    body: VendorQuoteSubmit,
    actor: CurrentActor,
    quotes: QuoteServiceDep,
):
    quote = await quotes.submit_vendor_quote(
        actor, quote_id, body.base_cost, deadline=body.deadline, notes=body.notes
    )
    return QuoteResponse.model_validate(quote)


@router.patch("/{quote_id}", response_model=QuoteResponse)
async def update_quote(
    quote_id: str,
    body: QuoteAction,
    actor: CurrentActor,
    quotes: QuoteServiceDep,
):
    """publish (finance), approve or reject (client)."""
    if body.action == "publish":
        quote = await quotes.apply_markup_and_publish(actor, quote_id, body.markup_percent)
    elif body.action == "approve":
        quote = await quotes.client_approve(actor, quote_id)
    else:
        quote = await quotes.client_reject(actor, quote_id, body.reason)
    return QuoteResponse.model_validate(quote)


@router.post("/{quote_id}/checkout", response_model=CheckoutResponse, status_code=201)
async def start_checkout(quote_id: str, actor: CurrentActor, quotes: QuoteServiceDep):
    session = await quotes.start_checkout(actor, quote_id)
    return CheckoutResponse.model_validate(session)


@router.post("/{quote_id}/payment-confirmation", response_model=QuoteResponse)
async def confirm_payment(
    quote_id: str,
    body: PaymentConfirmation,
    actor: CurrentActor,
    quotes: QuoteServiceDep,
):
    """Payment callback; repeating it for a paid quote is a no-op."""
    quote = await quotes.confirm_payment(actor, quote_id, body.payment_reference)
    return QuoteResponse.model_validate(quote)
