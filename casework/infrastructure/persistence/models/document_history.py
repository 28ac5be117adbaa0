"""Document history ORM model. Append-only transition log."""

from datetime import datetime

from sqlalchemy import DateTime, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from casework.infrastructure.persistence.database import Base
from casework.infrastructure.persistence.models.mixins import CuidMixin


class DocumentHistory(CuidMixin, Base):
    """History entry. Table: document_history. No FK so entries outlive deleted documents."""

    __tablename__ = "document_history"

    document_id: Mapped[str] = mapped_column(String, nullable=False)
    stage: Mapped[str] = mapped_column(String(20), nullable=False)
    from_status: Mapped[str | None] = mapped_column(String(40), nullable=True)
    to_status: Mapped[str] = mapped_column(String(40), nullable=False)
    actor_id: Mapped[str] = mapped_column(String, nullable=False)
    actor_role: Mapped[str] = mapped_column(String(20), nullable=False)
    timestamp: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    note: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (
        Index("ix_document_history_document_timestamp", "document_id", "timestamp"),
    )
