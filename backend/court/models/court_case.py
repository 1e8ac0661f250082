"""CourtCase ORM — persists a submitted dispute and its approval status.

Invariants:
    - id is an autoincrement integer; ordering by id desc is newest-first
    - title, argument, evidence_text are non-nullable text
    - status is one of PENDING / APPROVED / REJECTED (default PENDING)
    - submitted_by_id / submitted_by_name are written once at creation

Design Decisions:
    - Submitter name denormalized onto the case: principals come from the
      authentication collaborator, so there is no users table to JOIN for
      the submitter-name search
    - cascade delete for votes (ORM) plus ON DELETE CASCADE on the FK (DB)
"""

from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, String, Text, Integer, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship

from court.db.base import Base


class CourtCase(Base):
    """Court case entity — owns its jury votes."""
    __tablename__ = "court_cases"
    __table_args__ = (
        CheckConstraint(
            "status IN ('PENDING', 'APPROVED', 'REJECTED')",
            name="court_cases_status_check",
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    argument: Mapped[str] = mapped_column(Text, nullable=False)
    evidence_text: Mapped[str] = mapped_column(Text, nullable=False)
    evidence_file: Mapped[str | None] = mapped_column(String(500), nullable=True)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="PENDING", index=True,
    )
    submitted_by_id: Mapped[str] = mapped_column(
        String(64), nullable=False, index=True,
    )
    submitted_by_name: Mapped[str] = mapped_column(String(200), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    votes: Mapped[list["JuryVote"]] = relationship(
        "JuryVote", back_populates="court_case",
        cascade="all, delete-orphan", passive_deletes=True,
    )
