"""Application lifespan: startup and shutdown.

Single place for startup/shutdown wiring; no business logic here.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from casework.core.config import get_settings
from casework.infrastructure.external.storage import StorageFactory
from casework.infrastructure.persistence.memory import InMemoryStore
from casework.infrastructure.services import (
    LogOnlyNotificationService,
    LogOnlyPaymentGateway,
)
from casework.shared.telemetry.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup: logging, storage backend, collaborators, and the in-memory
    record store when database_backend is 'memory'. Shutdown: SQL engine dispose.
    """
    settings = get_settings()
    setup_logging()

    # ---- Startup ----
    app.state.storage = StorageFactory.create_storage_service(settings)
    app.state.notifier = LogOnlyNotificationService()
    app.state.payment_gateway = LogOnlyPaymentGateway(settings.checkout_base_url)
    app.state.memory_store = (
        InMemoryStore() if settings.database_backend == "memory" else None
    )
    logger.info(
        "%s %s started (database_backend=%s, storage_backend=%s)",
        settings.app_name,
        settings.app_version,
        settings.database_backend,
        settings.storage_backend,
    )

    yield

    # ---- Shutdown ----
    from casework.infrastructure.persistence import database

    await database.dispose_engine()
