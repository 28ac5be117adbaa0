"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for the acting identity, the record store and the
application services. All services are built from infrastructure
implementations here; routes depend only on these dependencies.

When database_backend is 'memory', repositories come from the InMemoryStore on
app.state. When it is 'postgres', one transactional session per request backs
all repositories so a transition, its history entry and its quote side
effects commit or roll back together.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable
from dataclasses import dataclass
from typing import Annotated, Any

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from casework.application.interfaces import (
    IDocumentHistoryRepository,
    IDocumentRepository,
    INotificationService,
    IPaymentGateway,
    IQuoteRepository,
    IRequirementRequestRepository,
    IStorageService,
)
from casework.application.services import (
    DocumentStatusEngine,
    QuoteNegotiationService,
    RequirementRequestCoordinator,
    StageProjector,
)
from casework.application.use_cases import GetCaseChecklistUseCase
from casework.core.config import Settings, get_settings
from casework.domain.certification_paths import CertificationPathTable
from casework.domain.entities import Actor
from casework.domain.enums import ActorRole
from casework.domain.exceptions import ValidationException
from casework.domain.pricing import PricingConfig
from casework.infrastructure.external.storage import StorageFactory
from casework.infrastructure.persistence.database import get_session_factory
from casework.infrastructure.persistence.memory import InMemoryStore
from casework.infrastructure.persistence.repositories import (
    DocumentHistoryRepository,
    DocumentRepository,
    QuoteRepository,
    RequirementRequestRepository,
)
from casework.infrastructure.services import (
    LogOnlyNotificationService,
    LogOnlyPaymentGateway,
)


def _app_state(request: Request, name: str, factory: Callable[[], Any]) -> Any:
    """Return app.state.<name>, creating it on first use.

    The lifespan normally creates these; ASGI test transports that skip the
    lifespan get them lazily.
    """
    value = getattr(request.app.state, name, None)
    if value is None:
        value = factory()
        setattr(request.app.state, name, value)
    return value


# Identity


def get_actor(
    actor_id: Annotated[str | None, Header(alias="X-Actor-Id")] = None,
    actor_role: Annotated[str | None, Header(alias="X-Actor-Role")] = None,
) -> Actor:
    """Acting identity from X-Actor-Id / X-Actor-Role (authentication happens upstream)."""
    if not actor_id or not actor_id.strip():
        raise ValidationException("X-Actor-Id header is required", field="X-Actor-Id")
    if not actor_role:
        raise ValidationException("X-Actor-Role header is required", field="X-Actor-Role")
    try:
        role = ActorRole(actor_role.strip().upper())
    except ValueError as e:
        raise ValidationException(
            f"Unknown actor role {actor_role!r}; expected one of {ActorRole.values()}",
            field="X-Actor-Role",
        ) from e
    return Actor(id=actor_id.strip(), role=role)


# Configuration snapshots


def get_certification_paths(
    settings: Annotated[Settings, Depends(get_settings)],
) -> CertificationPathTable:
    """Built-in certification paths merged with CERTIFICATION_PATHS overrides."""
    return CertificationPathTable(settings.certification_paths)


def get_pricing(settings: Annotated[Settings, Depends(get_settings)]) -> PricingConfig:
    """Finance defaults snapshot for the quote service."""
    return PricingConfig(
        default_markup_percent=settings.default_markup_percent,
        default_apostille_price=settings.default_apostille_price,
        quantum=settings.currency_quantum,
    )


# Collaborators


def get_storage_service(request: Request) -> IStorageService:
    return _app_state(request, "storage", StorageFactory.create_storage_service)


def get_notification_service(request: Request) -> INotificationService:
    return _app_state(request, "notifier", LogOnlyNotificationService)


def get_payment_gateway(request: Request) -> IPaymentGateway:
    return _app_state(
        request,
        "payment_gateway",
        lambda: LogOnlyPaymentGateway(get_settings().checkout_base_url),
    )


# Record store


@dataclass(frozen=True)
class Repositories:
    """The four repositories of one request, sharing a session or store."""

    documents: IDocumentRepository
    quotes: IQuoteRepository
    history: IDocumentHistoryRepository
    requests: IRequirementRequestRepository

    @classmethod
    def from_memory(cls, store: InMemoryStore) -> Repositories:
        return cls(
            documents=store.documents,
            quotes=store.quotes,
            history=store.history,
            requests=store.requests,
        )

    @classmethod
    def from_session(cls, session: AsyncSession) -> Repositories:
        return cls(
            documents=DocumentRepository(session),
            quotes=QuoteRepository(session),
            history=DocumentHistoryRepository(session),
            requests=RequirementRequestRepository(session),
        )


async def get_repositories(
    request: Request,
    settings: Annotated[Settings, Depends(get_settings)],
) -> AsyncIterator[Repositories]:
    """Repositories for the configured backend (transactional for postgres)."""
    if settings.database_backend == "memory":
        yield Repositories.from_memory(_app_state(request, "memory_store", InMemoryStore))
        return
    session_factory = get_session_factory()
    async with session_factory() as session:
        async with session.begin():
            yield Repositories.from_session(session)


# Services


def get_status_engine(
    repos: Annotated[Repositories, Depends(get_repositories)],
    storage: Annotated[IStorageService, Depends(get_storage_service)],
    paths: Annotated[CertificationPathTable, Depends(get_certification_paths)],
) -> DocumentStatusEngine:
    return DocumentStatusEngine(
        document_repo=repos.documents,
        history_repo=repos.history,
        quote_repo=repos.quotes,
        request_repo=repos.requests,
        storage_service=storage,
        certification_paths=paths,
    )


def get_quote_service(
    repos: Annotated[Repositories, Depends(get_repositories)],
    engine: Annotated[DocumentStatusEngine, Depends(get_status_engine)],
    payments: Annotated[IPaymentGateway, Depends(get_payment_gateway)],
    pricing: Annotated[PricingConfig, Depends(get_pricing)],
) -> QuoteNegotiationService:
    return QuoteNegotiationService(
        quote_repo=repos.quotes,
        status_engine=engine,
        payment_gateway=payments,
        pricing=pricing,
    )


def get_request_coordinator(
    repos: Annotated[Repositories, Depends(get_repositories)],
    notifier: Annotated[INotificationService, Depends(get_notification_service)],
    paths: Annotated[CertificationPathTable, Depends(get_certification_paths)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> RequirementRequestCoordinator:
    return RequirementRequestCoordinator(
        request_repo=repos.requests,
        document_repo=repos.documents,
        history_repo=repos.history,
        notification_service=notifier,
        certification_paths=paths,
        default_deadline_days=settings.default_request_deadline_days,
    )


def get_stage_projector(
    repos: Annotated[Repositories, Depends(get_repositories)],
    paths: Annotated[CertificationPathTable, Depends(get_certification_paths)],
) -> StageProjector:
    return StageProjector(quote_repo=repos.quotes, certification_paths=paths)


def get_case_checklist_use_case(
    repos: Annotated[Repositories, Depends(get_repositories)],
    projector: Annotated[StageProjector, Depends(get_stage_projector)],
) -> GetCaseChecklistUseCase:
    return GetCaseChecklistUseCase(document_repo=repos.documents, projector=projector)


CurrentActor = Annotated[Actor, Depends(get_actor)]
StatusEngineDep = Annotated[DocumentStatusEngine, Depends(get_status_engine)]
QuoteServiceDep = Annotated[QuoteNegotiationService, Depends(get_quote_service)]
RequestCoordinatorDep = Annotated[
    RequirementRequestCoordinator, Depends(get_request_coordinator)
]
ProjectorDep = Annotated[StageProjector, Depends(get_stage_projector)]
