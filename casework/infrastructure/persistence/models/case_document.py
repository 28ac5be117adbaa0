"""Case document ORM model. Workflow status, certification flags and file reference."""

from datetime import datetime

from sqlalchemy import BigInteger, Boolean, DateTime, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from casework.infrastructure.persistence.database import Base
from casework.infrastructure.persistence.models.mixins import (
    CuidMixin,
    TimestampMixin,
    VersionedMixin,
)


class CaseDocument(CuidMixin, TimestampMixin, VersionedMixin, Base):
    """Document record. Table: case_document."""

    __tablename__ = "case_document"

    owner_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    parent_case_id: Mapped[str | None] = mapped_column(String, nullable=True, index=True)
    member_id: Mapped[str | None] = mapped_column(String, nullable=True)
    document_type: Mapped[str] = mapped_column(String(100), nullable=False)
    status: Mapped[str] = mapped_column(String(40), nullable=False, index=True)
    is_apostilled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_translated: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    rejection_reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    storage_ref: Mapped[str | None] = mapped_column(String, nullable=True)
    public_url: Mapped[str | None] = mapped_column(String, nullable=True)
    original_filename: Mapped[str | None] = mapped_column(String, nullable=True)
    content_type: Mapped[str | None] = mapped_column(String(255), nullable=True)
    file_size: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    revision: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    due_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    reviewed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    reviewed_by: Mapped[str | None] = mapped_column(String, nullable=True)

    __table_args__ = (
        Index(
            "ix_case_document_requirement",
            "owner_id",
            "document_type",
            "member_id",
        ),
    )
