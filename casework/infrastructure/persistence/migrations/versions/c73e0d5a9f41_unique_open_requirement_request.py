"""unique_open_requirement_request

Revision ID: c73e0d5a9f41
Revises: a1c4e7f20b13
Create Date: 2026-10-19 14:20:03.512904

At most one OPEN requirement request per (owner, document type, member).
A NULL member counts as one value, hence the coalesce.
"""

from collections.abc import Sequence
from typing import Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "c73e0d5a9f41"
down_revision: Union[str, Sequence[str], None] = "a1c4e7f20b13"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.drop_index("ix_requirement_request_key", table_name="requirement_request")
    op.create_index(
        "ux_requirement_request_open",
        "requirement_request",
        ["owner_id", "document_type", sa.text("coalesce(target_member_id, '')")],
        unique=True,
        postgresql_where=sa.text("status = 'OPEN'"),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("ux_requirement_request_open", table_name="requirement_request")
    op.create_index(
        "ix_requirement_request_key",
        "requirement_request",
        ["owner_id", "document_type", "target_member_id", "status"],
        unique=False,
    )
