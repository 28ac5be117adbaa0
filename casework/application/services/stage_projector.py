"""Actor-facing stage derivation.

project_stage is a pure function of (document, required certifications,
quote); every read path goes through it so client, staff, vendor and
finance views agree. StageProjector only gathers those inputs.
"""

from __future__ import annotations

from casework.application.dtos.document import DocumentView
from casework.application.interfaces.repositories import IQuoteRepository
from casework.domain.certification_paths import CertificationPathTable
from casework.domain.entities import DocumentEntity, QuoteEntity
from casework.domain.enums import CertificationKind, DocumentStatus, QuoteStatus, Stage


def project_stage(
    document: DocumentEntity | None,
    required_certifications: tuple[CertificationKind, ...] = (),
    quote: QuoteEntity | None = None,
) -> Stage:
    """Derive the stage; first matching rule wins.

    1. no document -> MISSING
    2. REQUESTED placeholder -> REQUESTED
    3. REJECTED -> REJECTED
    4. WAITING_/ANALYZING_<kind> with that kind's quote awaiting the client
       -> WAITING_QUOTE_APPROVAL
    5. WAITING_/ANALYZING_<kind> -> the sub-stage label
    6. APPROVED with every required certification done -> COMPLETED
    7. otherwise ANALYZING

    Example:
        >>> project_stage(None)
        <Stage.MISSING: 'MISSING'>
    """
    if document is None:
        return Stage.MISSING
    if document.status == DocumentStatus.REQUESTED:
        return Stage.REQUESTED
    if document.status == DocumentStatus.REJECTED:
        return Stage.REJECTED
    kind = document.status.certification_kind
    if kind is not None:
        if (
            quote is not None
            and quote.document_id == document.id
            and quote.kind == kind
            and quote.status == QuoteStatus.AWAITING_CLIENT_APPROVAL
        ):
            return Stage.WAITING_QUOTE_APPROVAL
        return Stage(document.status.value)
    if document.is_fully_complete(required_certifications):
        return Stage.COMPLETED
    return Stage.ANALYZING


class StageProjector:
    """Builds DocumentView read-models (document + stage + open quotes)."""

    def __init__(
        self,
        quote_repo: IQuoteRepository,
        certification_paths: CertificationPathTable | None = None,
    ) -> None:
        self._quotes = quote_repo
        self._paths = certification_paths or CertificationPathTable()

    async def view(self, document: DocumentEntity) -> DocumentView:
        required = self._paths.path_for(document.document_type)
        active = [q for q in await self._quotes.list_by_document(document.id) if q.is_active]
        kind = document.status.certification_kind
        current = next((q for q in active if q.kind == kind), None)
        return DocumentView(
            document=document,
            stage=project_stage(document, required, current),
            required_certifications=required,
            active_quotes=active,
        )

    async def views(self, documents: list[DocumentEntity]) -> list[DocumentView]:
        return [await self.view(d) for d in documents]
