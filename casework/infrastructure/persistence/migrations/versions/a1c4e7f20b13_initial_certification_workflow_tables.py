"""initial certification workflow tables

Revision ID: a1c4e7f20b13
Revises:
Create Date: 2026-10-19

case_document = one record per uploaded or requested document (status + flags).
certification_quote = apostille/translation quotes; partial unique index keeps
one non-terminal quote per (document, kind).
document_history = append-only transition log.
requirement_request = staff requests for a document.
"""

from collections.abc import Sequence
from typing import Union

import sqlalchemy as sa
from alembic import op

revision: str = "a1c4e7f20b13"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "case_document",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("owner_id", sa.String(), nullable=False),
        sa.Column("parent_case_id", sa.String(), nullable=True),
        sa.Column("member_id", sa.String(), nullable=True),
        sa.Column("document_type", sa.String(length=100), nullable=False),
        sa.Column("status", sa.String(length=40), nullable=False),
        sa.Column("is_apostilled", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_translated", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("rejection_reason", sa.Text(), nullable=True),
        sa.Column("storage_ref", sa.String(), nullable=True),
        sa.Column("public_url", sa.String(), nullable=True),
        sa.Column("original_filename", sa.String(), nullable=True),
        sa.Column("content_type", sa.String(length=255), nullable=True),
        sa.Column("file_size", sa.BigInteger(), nullable=True),
        sa.Column("revision", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("due_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("reviewed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("reviewed_by", sa.String(), nullable=True),
        sa.Column("version", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_case_document_owner_id", "case_document", ["owner_id"], unique=False)
    op.create_index(
        "ix_case_document_parent_case_id", "case_document", ["parent_case_id"], unique=False
    )
    op.create_index("ix_case_document_status", "case_document", ["status"], unique=False)
    op.create_index(
        "ix_case_document_requirement",
        "case_document",
        ["owner_id", "document_type", "member_id"],
        unique=False,
    )

    op.create_table(
        "certification_quote",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("document_id", sa.String(), nullable=False),
        sa.Column("kind", sa.String(length=20), nullable=False),
        sa.Column("status", sa.String(length=40), nullable=False),
        sa.Column("base_cost", sa.Numeric(12, 2), nullable=True),
        sa.Column("markup_percent", sa.Numeric(7, 3), nullable=True),
        sa.Column("final_price", sa.Numeric(12, 2), nullable=True),
        sa.Column("deadline", sa.Date(), nullable=True),
        sa.Column("vendor_notes", sa.Text(), nullable=True),
        sa.Column("requested_by", sa.String(), nullable=True),
        sa.Column("quoted_by", sa.String(), nullable=True),
        sa.Column("published_by", sa.String(), nullable=True),
        sa.Column("decided_by", sa.String(), nullable=True),
        sa.Column("rejection_reason", sa.Text(), nullable=True),
        sa.Column("payment_reference", sa.String(), nullable=True),
        sa.Column("idempotency_key", sa.String(length=255), nullable=True),
        sa.Column("version", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["document_id"], ["case_document.id"]),
        sa.CheckConstraint("kind IN ('APOSTILLE', 'TRANSLATION')", name="ck_certification_quote_kind"),
        sa.CheckConstraint("base_cost IS NULL OR base_cost > 0", name="ck_certification_quote_base_cost"),
        sa.CheckConstraint(
            "markup_percent IS NULL OR markup_percent >= 0",
            name="ck_certification_quote_markup",
        ),
    )
    op.create_index(
        "ix_certification_quote_document_id", "certification_quote", ["document_id"], unique=False
    )
    op.create_index(
        "ix_certification_quote_status", "certification_quote", ["status"], unique=False
    )
    op.create_index(
        "ux_certification_quote_active",
        "certification_quote",
        ["document_id", "kind"],
        unique=True,
        postgresql_where=sa.text(
            "status IN ('AWAITING_VENDOR_QUOTE', 'QUOTED', 'AWAITING_CLIENT_APPROVAL', 'APPROVED')"
        ),
    )

    op.create_table(
        "document_history",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("document_id", sa.String(), nullable=False),
        sa.Column("stage", sa.String(length=20), nullable=False),
        sa.Column("from_status", sa.String(length=40), nullable=True),
        sa.Column("to_status", sa.String(length=40), nullable=False),
        sa.Column("actor_id", sa.String(), nullable=False),
        sa.Column("actor_role", sa.String(length=20), nullable=False),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False),
        sa.Column("note", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_document_history_document_timestamp",
        "document_history",
        ["document_id", "timestamp"],
        unique=False,
    )

    op.create_table(
        "requirement_request",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("owner_id", sa.String(), nullable=False),
        sa.Column("document_type", sa.String(length=100), nullable=False),
        sa.Column("document_id", sa.String(), nullable=False),
        sa.Column("target_member_id", sa.String(), nullable=True),
        sa.Column("parent_case_id", sa.String(), nullable=True),
        sa.Column("created_by", sa.String(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("deadline_days", sa.Integer(), nullable=True),
        sa.Column("due_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("notify", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("notification_status", sa.String(length=20), nullable=False),
        sa.Column("note", sa.Text(), nullable=True),
        sa.Column("fulfilled_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("version", sa.Integer(), nullable=False, server_default="1"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_requirement_request_owner_id", "requirement_request", ["owner_id"], unique=False
    )
    op.create_index(
        "ix_requirement_request_document_id",
        "requirement_request",
        ["document_id"],
        unique=False,
    )
    op.create_index(
        "ix_requirement_request_key",
        "requirement_request",
        ["owner_id", "document_type", "target_member_id", "status"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index("ix_requirement_request_key", table_name="requirement_request")
    op.drop_index("ix_requirement_request_document_id", table_name="requirement_request")
    op.drop_index("ix_requirement_request_owner_id", table_name="requirement_request")
    op.drop_table("requirement_request")
    op.drop_index("ix_document_history_document_timestamp", table_name="document_history")
    op.drop_table("document_history")
    op.drop_index("ux_certification_quote_active", table_name="certification_quote")
    op.drop_index("ix_certification_quote_status", table_name="certification_quote")
    op.drop_index("ix_certification_quote_document_id", table_name="certification_quote")
    op.drop_table("certification_quote")
    op.drop_index("ix_case_document_requirement", table_name="case_document")
    op.drop_index("ix_case_document_status", table_name="case_document")
    op.drop_index("ix_case_document_parent_case_id", table_name="case_document")
    op.drop_index("ix_case_document_owner_id", table_name="case_document")
    op.drop_table("case_document")
