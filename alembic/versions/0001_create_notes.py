"""create notes table

Revision ID: 0001_create_notes
Revises: 
Create Date: 2025-06-01 00:00:00

"""
from __future__ import annotations

from alembic import op
import sqlalchemy as sa

revision = "0001_create_notes"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "notes",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("owner", sa.String(length=255), nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("last_updated", sa.String(length=40), nullable=False),
    )
    op.create_index("ix_notes_owner", "notes", ["owner"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_notes_owner", table_name="notes")
    op.drop_table("notes")
