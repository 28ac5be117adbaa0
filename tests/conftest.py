"""Pytest configuration and fixtures for casework.

Tests run against the in-memory record store and a temporary local storage
root. HTTP tests build a fresh app per test; services are wired directly for
unit tests with a deterministic clock.
"""

import os
import tempfile
from collections.abc import AsyncIterator, Awaitable, Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

os.environ.setdefault("DATABASE_BACKEND", "memory")
os.environ.setdefault("STORAGE_ROOT", tempfile.mkdtemp(prefix="casework-tests-"))

from casework.application.dtos import DocumentUpload  # noqa: E402
from casework.application.services import (  # noqa: E402
    DocumentStatusEngine,
    QuoteNegotiationService,
    RequirementRequestCoordinator,
    StageProjector,
)
from casework.core.config import get_settings  # noqa: E402
from casework.domain.certification_paths import CertificationPathTable  # noqa: E402
from casework.domain.entities import Actor, DocumentEntity  # noqa: E402
from casework.domain.enums import ActorRole  # noqa: E402
from casework.domain.pricing import PricingConfig  # noqa: E402
from casework.infrastructure.external.storage.local_storage import (  # noqa: E402
    LocalStorageService,
)
from casework.infrastructure.persistence import database  # noqa: E402
from casework.infrastructure.persistence.memory import InMemoryStore  # noqa: E402
from casework.infrastructure.services import LogOnlyPaymentGateway  # noqa: E402
from casework.main import create_app  # noqa: E402


class TickingClock:
    """Clock that advances one second per call so timestamps are strictly ordered."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2026, 3, 2, 9, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        self.now += timedelta(seconds=1)
        return self.now


@dataclass(frozen=True)
class Actors:
    client: Actor
    other_client: Actor
    staff: Actor
    vendor: Actor
    finance: Actor
    system: Actor


@pytest.fixture
def actors() -> Actors:
    return Actors(
        client=Actor("client-1", ActorRole.CLIENT),
        other_client=Actor("client-2", ActorRole.CLIENT),
        staff=Actor("staff-1", ActorRole.STAFF),
        vendor=Actor("vendor-1", ActorRole.VENDOR),
        finance=Actor("finance-1", ActorRole.FINANCE),
        system=Actor.system("payments"),
    )


@pytest.fixture
def clock() -> TickingClock:
    return TickingClock()


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def storage(tmp_path) -> LocalStorageService:
    return LocalStorageService(str(tmp_path / "files"), base_url="https://files.test")


@pytest.fixture
def paths() -> CertificationPathTable:
    return CertificationPathTable()


@pytest.fixture
def engine(store, storage, paths, clock) -> DocumentStatusEngine:
    return DocumentStatusEngine(
        document_repo=store.documents,
        history_repo=store.history,
        quote_repo=store.quotes,
        request_repo=store.requests,
        storage_service=storage,
        certification_paths=paths,
        clock=clock,
    )


@pytest.fixture
def payments() -> LogOnlyPaymentGateway:
    return LogOnlyPaymentGateway(checkout_base_url="https://pay.test/checkout")


@pytest.fixture
def quotes(store, engine, payments, clock) -> QuoteNegotiationService:
    return QuoteNegotiationService(
        quote_repo=store.quotes,
        status_engine=engine,
        payment_gateway=payments,
        pricing=PricingConfig(),
        clock=clock,
    )


@pytest.fixture
def notifier() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def coordinator(store, notifier, paths, clock) -> RequirementRequestCoordinator:
    return RequirementRequestCoordinator(
        request_repo=store.requests,
        document_repo=store.documents,
        history_repo=store.history,
        notification_service=notifier,
        certification_paths=paths,
        clock=clock,
    )


@pytest.fixture
def projector(store, paths) -> StageProjector:
    return StageProjector(quote_repo=store.quotes, certification_paths=paths)


@pytest.fixture
def upload(engine, actors) -> Callable[..., Awaitable[DocumentEntity]]:
    """Upload helper: await upload("birth_certificate", document_id=...)."""

    async def _upload(
        document_type: str = "birth_certificate",
        actor: Actor | None = None,
        content: bytes = b"%PDF-1.7 scan",
        **kwargs,
    ) -> DocumentEntity:
        who = actor or actors.client
        return await engine.upload(
            who,
            DocumentUpload(
                owner_id=kwargs.pop("owner_id", who.id),
                document_type=document_type,
                content=content,
                filename=kwargs.pop("filename", "scan.pdf"),
                content_type="application/pdf",
                **kwargs,
            ),
        )

    return _upload


@pytest.fixture
async def client() -> AsyncIterator[AsyncClient]:
    """Async HTTP client against a fresh app (own in-memory store per test)."""
    get_settings.cache_clear()
    transport = ASGITransport(app=create_app())
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def db_session() -> AsyncIterator[AsyncSession]:
    """Database session for repository integration tests. Rolls back after test.

    Requires DATABASE_BACKEND=postgres and DATABASE_URL with migrations
    applied. Skips when Postgres is not configured; run without DB via
    pytest -m 'not requires_db'.
    """
    database._ensure_engine()
    if database.AsyncSessionLocal is None:
        pytest.skip(
            "Postgres not configured: set DATABASE_BACKEND=postgres and DATABASE_URL, "
            "then run: alembic upgrade head"
        )
    async with database.AsyncSessionLocal() as session:
        yield session
        await session.rollback()
