"""Initial schema

Revision ID: 001
Revises:
Create Date: 2026-10-19

Creates the plan_document table: one row per plan with days and
activities embedded in a JSON document.
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Create plan_document."""
    op.create_table(
        "plan_document",
        sa.Column("plan_id", sa.Text(), primary_key=True),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("status", sa.Text(), nullable=False),
        sa.Column("share_link", sa.Text(), nullable=True),
        sa.Column(
            "document",
            sa.JSON().with_variant(postgresql.JSONB(), "postgresql"),
            nullable=False,
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("idx_plan_document_updated", "plan_document", ["updated_at"])
    op.create_index("idx_plan_document_share_link", "plan_document", ["share_link"])


def downgrade() -> None:
    """Drop plan_document."""
    op.drop_index("idx_plan_document_share_link", table_name="plan_document")
    op.drop_index("idx_plan_document_updated", table_name="plan_document")
    op.drop_table("plan_document")
