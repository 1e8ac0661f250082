"""Initial schema — court_cases and jury_votes.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-17

jury_votes uses (case_id, juror_id) as its primary key so the database
rejects a second vote from the same juror atomically. case_id cascades
on delete so removing a case removes its votes.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "court_cases",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("argument", sa.Text, nullable=False),
        sa.Column("evidence_text", sa.Text, nullable=False),
        sa.Column("evidence_file", sa.String(500), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="PENDING"),
        sa.Column("submitted_by_id", sa.String(64), nullable=False),
        sa.Column("submitted_by_name", sa.String(200), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint(
            "status IN ('PENDING', 'APPROVED', 'REJECTED')",
            name="court_cases_status_check",
        ),
    )
    op.create_index("ix_court_cases_status", "court_cases", ["status"])
    op.create_index("ix_court_cases_submitted_by_id", "court_cases", ["submitted_by_id"])

    op.create_table(
        "jury_votes",
        sa.Column(
            "case_id", sa.Integer,
            sa.ForeignKey("court_cases.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("juror_id", sa.String(64), primary_key=True),
        sa.Column("verdict", sa.String(20), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint(
            "verdict IN ('GUILTY', 'NOT_GUILTY')",
            name="jury_votes_verdict_check",
        ),
    )
    op.create_index("ix_jury_votes_juror_id", "jury_votes", ["juror_id"])


def downgrade() -> None:
    op.drop_index("ix_jury_votes_juror_id", table_name="jury_votes")
    op.drop_table("jury_votes")
    op.drop_index("ix_court_cases_submitted_by_id", table_name="court_cases")
    op.drop_index("ix_court_cases_status", table_name="court_cases")
    op.drop_table("court_cases")
