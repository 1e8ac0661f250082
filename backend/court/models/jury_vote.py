"""JuryVote ORM — one juror's verdict on one case.

Invariants:
    - Composite primary key (case_id, juror_id): at most one vote per pair,
      enforced atomically by the database at insert time
    - verdict is GUILTY or NOT_GUILTY and never updated

Design Decisions:
    - Composite PK over surrogate id + unique constraint: the pair IS the identity
    - ON DELETE CASCADE on case_id: deleting a case can never leave stale votes
"""

from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, String, Integer, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from court.db.base import Base


class JuryVote(Base):
    """Jury vote entity — immutable after insert."""
    __tablename__ = "jury_votes"
    __table_args__ = (
        CheckConstraint(
            "verdict IN ('GUILTY', 'NOT_GUILTY')",
            name="jury_votes_verdict_check",
        ),
    )

    case_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("court_cases.id", ondelete="CASCADE"),
        primary_key=True,
    )
    juror_id: Mapped[str] = mapped_column(String(64), primary_key=True, index=True)
    verdict: Mapped[str] = mapped_column(String(20), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    court_case: Mapped["CourtCase"] = relationship(
        "CourtCase", back_populates="votes",
    )
