"""create summaries table

Revision ID: 3f1c9a7d2b40
Revises:
Create Date: 2026-10-17 10:02:11.481920

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c9a7d2b40'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "summaries",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("original_text", sa.Text(), nullable=False),
        sa.Column("summary_text", sa.Text(), nullable=False),
        sa.Column("summary_style", sa.String(length=20), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_summaries_created_at", "summaries", ["created_at"])
    op.create_index(
        op.f("ix_summaries_summary_style"), "summaries", ["summary_style"]
    )


def downgrade() -> None:
    op.drop_index(op.f("ix_summaries_summary_style"), table_name="summaries")
    op.drop_index("ix_summaries_created_at", table_name="summaries")
    op.drop_table("summaries")
