"""Document API: thin routes delegating to DocumentStatusEngine and StageProjector."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Query, Response, UploadFile

from casework.api.v1.dependencies import (
    CurrentActor,
    ProjectorDep,
    QuoteServiceDep,
    StatusEngineDep,
)
from casework.application.dtos import DocumentUpload
from casework.core.config import Settings, get_settings
from casework.domain.exceptions import ValidationException
from casework.schemas.document import (
    DocumentHistoryItem,
    DocumentResponse,
    DocumentStatusUpdate,
)
from casework.schemas.quote import QuoteRequestCreate, QuoteResponse

router = APIRouter()

UPLOAD_CHUNK_SIZE = 65536


async def _read_bounded(file: UploadFile, limit: int) -> bytes:
    """Read the upload in chunks, stopping as soon as it exceeds limit bytes."""
    chunks: list[bytes] = []
    total = 0
    while chunk := await file.read(UPLOAD_CHUNK_SIZE):
        total += len(chunk)
        if total > limit:
            raise ValidationException(
                f"File exceeds maximum upload size of {limit} bytes", field="file"
            )
        chunks.append(chunk)
    return b"".join(chunks)


@router.post("", response_model=DocumentResponse, status_code=201)
async def upload_document(
    actor: CurrentActor,
    engine: StatusEngineDep,
    projector: ProjectorDep,
    settings: Annotated[Settings, Depends(get_settings)],
    owner_id: str = Form(...),
    document_type: str = Form(...),
    file: UploadFile = File(...),
    parent_case_id: str | None = Form(None),
    member_id: str | None = Form(None),
    document_id: str | None = Form(None),
):
    """Upload a new document, fill a requested placeholder or replace an existing one."""
    if not file.filename:
        raise ValidationException("Filename required", field="file")
    content = await _read_bounded(file, settings.max_upload_size)
    document = await engine.upload(
        actor,
        DocumentUpload(
            owner_id=owner_id,
            document_type=document_type,
            content=content,
            filename=file.filename,
            content_type=file.content_type or "application/octet-stream",
            parent_case_id=parent_case_id,
            member_id=member_id,
            document_id=document_id,
        ),
    )
    return DocumentResponse.from_view(await projector.view(document))


@router.get("", response_model=list[DocumentResponse])
async def list_documents(
    actor: CurrentActor,
    engine: StatusEngineDep,
    projector: ProjectorDep,
    owner_id: str | None = Query(None),
    parent_case_id: str | None = Query(None),
):
    """List documents of an owner or a case, each with its projected stage."""
    documents = await engine.list_documents(
        actor, owner_id=owner_id, parent_case_id=parent_case_id
    )
    return [DocumentResponse.from_view(v) for v in await projector.views(documents)]


@router.get("/{document_id}", response_model=DocumentResponse)
async def get_document(
    document_id: str,
    actor: CurrentActor,
    engine: StatusEngineDep,
    projector: ProjectorDep,
):
    document = await engine.get_document(document_id, actor)
    return DocumentResponse.from_view(await projector.view(document))


@router.get("/{document_id}/history", response_model=list[DocumentHistoryItem])
async def get_document_history(
    document_id: str,
    actor: CurrentActor,
    engine: StatusEngineDep,
):
    """Audit timeline, oldest first."""
    entries = await engine.get_history(document_id, actor)
    return [DocumentHistoryItem.from_entry(e) for e in entries]


@router.post("/{document_id}/status", response_model=DocumentResponse)
async def transition_document(
    document_id: str,
    body: DocumentStatusUpdate,
    actor: CurrentActor,
    engine: StatusEngineDep,
    projector: ProjectorDep,
):
    """Staff moves a document to a target status (approve, reject, certification steps)."""
    document = await engine.transition_to(
        actor,
        document_id,
        body.to_status,
        rejection_reason=body.rejection_reason,
        note=body.note,
    )
    return DocumentResponse.from_view(await projector.view(document))


@router.delete("/{document_id}", status_code=204)
async def delete_document(
    document_id: str,
    actor: CurrentActor,
    engine: StatusEngineDep,
) -> Response:
    """Delete a document; open quotes are cancelled and open requests closed."""
    await engine.delete_document(actor, document_id)
    return Response(status_code=204)


@router.post("/{document_id}/quotes", response_model=QuoteResponse, status_code=201)
async def request_quote(
    document_id: str,
    body: QuoteRequestCreate,
    actor: CurrentActor,
    quotes: QuoteServiceDep,
):
    """Staff opens a quote for the certification step the document is waiting on."""
    quote = await quotes.request_quote(
        actor,
        document_id,
        body.kind,
        idempotency_key=body.idempotency_key,
        supersede=body.supersede,
    )
    return QuoteResponse.model_validate(quote)


@router.get("/{document_id}/quotes", response_model=list[QuoteResponse])
async def list_document_quotes(
    document_id: str,
    actor: CurrentActor,
    engine: StatusEngineDep,
    quotes: QuoteServiceDep,
):
    """All quotes of a document, including terminal ones."""
    await engine.get_document(document_id, actor)
    return [
        QuoteResponse.model_validate(q)
        for q in await quotes.list_quotes_for_document(document_id)
    ]
