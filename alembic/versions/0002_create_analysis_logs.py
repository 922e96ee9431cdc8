"""create analysis_logs table

Revision ID: 0002_create_analysis_logs
Revises: 0001_create_notes
Create Date: 2025-06-08 00:00:00

"""
from __future__ import annotations

from alembic import op
import sqlalchemy as sa

revision = "0002_create_analysis_logs"
down_revision = "0001_create_notes"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "analysis_logs",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("owner", sa.String(length=255), nullable=False),
        sa.Column("analysis_type", sa.String(length=64), nullable=False),
        sa.Column("notes_analyzed", sa.JSON(), nullable=False),
        sa.Column("generated_resources", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.String(length=40), nullable=False),
        sa.Column("trigger_type", sa.String(length=16), nullable=False),
    )
    op.create_index(
        "ix_analysis_logs_owner", "analysis_logs", ["owner"], unique=False
    )


def downgrade() -> None:
    op.drop_index("ix_analysis_logs_owner", table_name="analysis_logs")
    op.drop_table("analysis_logs")
