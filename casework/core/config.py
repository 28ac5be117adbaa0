"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Backend-specific requirements (e.g. DATABASE_URL for
postgres) are validated at load time.
"""

import logging
from decimal import Decimal
from functools import lru_cache

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from casework.domain.enums import CertificationKind


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    Pricing and certification-path values are read once per request and
    handed to the core services as explicit snapshots; the services never
    call get_settings() themselves.
    """

    # App
    app_name: str = "casework"
    app_version: str = "1.0.0"
    debug: bool = False
    # DEBUG, INFO, WARNING, ...; unset means DEBUG under debug, else INFO
    log_level: str | None = None

    # Record store: "memory" (process-local) or "postgres" (SQLAlchemy + Alembic)
    database_backend: str = "memory"
    database_url: str = ""
    database_echo: bool = False
    db_pool_size: int | None = None
    db_max_overflow: int | None = None

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:8080"

    # Storage
    storage_backend: str = "local"
    storage_root: str = "/var/casework/storage"
    storage_base_url: str | None = None
    max_upload_size: int = 25 * 1024 * 1024  # 25MB

    # Quotes (finance defaults)
    default_markup_percent: Decimal = Decimal("20")
    default_apostille_price: Decimal | None = None
    currency_quantum: Decimal = Decimal("0.01")
    checkout_base_url: str = "/checkout"

    # Requirement requests
    default_request_deadline_days: int = 7

    # Document type -> ordered certification kinds; merged over the built-in table.
    certification_paths: dict[str, list[CertificationKind]] = {}

    # Request / middleware
    request_id_header: str = "X-Request-ID"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_backends_and_defaults(self) -> "Settings":
        """Validate backend selection and finance defaults.

        - Postgres: DATABASE_URL required.
        - Storage: only 'local' is supported.
        - Markup must be non-negative, apostille price positive when set.
        - LOG_LEVEL, when set, must name a logging level.
        """
        if self.database_backend == "postgres":
            if not self.database_url:
                raise ValueError(
                    "DATABASE_URL is required when database_backend is 'postgres'. "
                    "Set in environment or .env file."
                )
        elif self.database_backend != "memory":
            raise ValueError(
                f"database_backend must be 'memory' or 'postgres', got: {self.database_backend!r}"
            )
        if self.storage_backend != "local":
            raise ValueError(
                f"Invalid storage_backend '{self.storage_backend}'. Must be 'local'"
            )
        if self.default_markup_percent < 0:
            raise ValueError("DEFAULT_MARKUP_PERCENT must be >= 0")
        if self.default_apostille_price is not None and self.default_apostille_price <= 0:
            raise ValueError("DEFAULT_APOSTILLE_PRICE must be > 0 when set")
        if self.default_request_deadline_days <= 0:
            raise ValueError("DEFAULT_REQUEST_DEADLINE_DAYS must be > 0")
        if self.log_level and not isinstance(
            logging.getLevelName(self.log_level.strip().upper()), int
        ):
            raise ValueError(f"Unknown LOG_LEVEL: {self.log_level!r}")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
