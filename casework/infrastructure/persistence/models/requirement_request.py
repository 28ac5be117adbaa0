"""Requirement request ORM model (staff asking a client for a document)."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Index, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from casework.infrastructure.persistence.database import Base
from casework.infrastructure.persistence.models.mixins import CuidMixin, VersionedMixin


class RequirementRequest(CuidMixin, VersionedMixin, Base):
    """Requirement request. Table: requirement_request."""

    __tablename__ = "requirement_request"

    owner_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    document_type: Mapped[str] = mapped_column(String(100), nullable=False)
    document_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    target_member_id: Mapped[str | None] = mapped_column(String, nullable=True)
    parent_case_id: Mapped[str | None] = mapped_column(String, nullable=True)
    created_by: Mapped[str] = mapped_column(String, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    deadline_days: Mapped[int | None] = mapped_column(Integer, nullable=True)
    due_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    notify: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    notification_status: Mapped[str] = mapped_column(String(20), nullable=False)
    note: Mapped[str | None] = mapped_column(Text, nullable=True)
    fulfilled_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )


# At most one OPEN request per (owner, type, member); a NULL member is one value.
Index(
    "ux_requirement_request_open",
    RequirementRequest.owner_id,
    RequirementRequest.document_type,
    func.coalesce(RequirementRequest.target_member_id, ""),
    unique=True,
    postgresql_where=RequirementRequest.status == "OPEN",
)
