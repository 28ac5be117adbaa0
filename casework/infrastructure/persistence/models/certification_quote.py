"""Certification quote ORM model (apostille / translation pricing)."""

from datetime import date
from decimal import Decimal

from sqlalchemy import Date, ForeignKey, Index, Numeric, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from casework.infrastructure.persistence.database import Base
from casework.infrastructure.persistence.models.mixins import (
    CuidMixin,
    TimestampMixin,
    VersionedMixin,
)

# Statuses that still count against the one-open-quote-per-kind rule.
ACTIVE_QUOTE_STATUSES = (
    "AWAITING_VENDOR_QUOTE",
    "QUOTED",
    "AWAITING_CLIENT_APPROVAL",
    "APPROVED",
)


class CertificationQuote(CuidMixin, TimestampMixin, VersionedMixin, Base):
    """Quote record. Table: certification_quote."""

    __tablename__ = "certification_quote"

    document_id: Mapped[str] = mapped_column(
        String, ForeignKey("case_document.id"), nullable=False, index=True
    )
    kind: Mapped[str] = mapped_column(String(20), nullable=False)
    status: Mapped[str] = mapped_column(String(40), nullable=False, index=True)
    base_cost: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)
    markup_percent: Mapped[Decimal | None] = mapped_column(Numeric(7, 3), nullable=True)
    final_price: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)
    deadline: Mapped[date | None] = mapped_column(Date, nullable=True)
    vendor_notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    requested_by: Mapped[str | None] = mapped_column(String, nullable=True)
    quoted_by: Mapped[str | None] = mapped_column(String, nullable=True)
    published_by: Mapped[str | None] = mapped_column(String, nullable=True)
    decided_by: Mapped[str | None] = mapped_column(String, nullable=True)
    rejection_reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    payment_reference: Mapped[str | None] = mapped_column(String, nullable=True)
    idempotency_key: Mapped[str | None] = mapped_column(String(255), nullable=True)

    __table_args__ = (
        # At most one non-terminal quote per (document, kind).
        Index(
            "ux_certification_quote_active",
            "document_id",
            "kind",
            unique=True,
            postgresql_where=text(
                "status IN (" + ", ".join(f"'{s}'" for s in ACTIVE_QUOTE_STATUSES) + ")"
            ),
        ),
    )
