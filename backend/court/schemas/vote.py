"""Vote Schemas — Pydantic models for jury endpoints.

Invariants:
    - VoteCast.verdict is a plain string: the core parses it strictly and raises
      ValidationError for anything but GUILTY / NOT_GUILTY
    - TallyResponse always satisfies guilty + not_guilty == total_votes
"""

from datetime import datetime

from pydantic import BaseModel, Field

from court.core.domain_types import Tally, Verdict, VoteRecord


class VoteCast(BaseModel):
    verdict: str = Field(max_length=20)


class VoteResponse(BaseModel):
    """A single recorded vote."""
    case_id: int
    verdict: Verdict
    created_at: datetime | None = None

    @classmethod
    def from_record(cls, record: VoteRecord) -> "VoteResponse":
        return cls(
            case_id=record.case_id,
            verdict=record.verdict,
            created_at=record.created_at,
        )


class VoteCastResponse(BaseModel):
    message: str
    vote: VoteResponse


class TallyResponse(BaseModel):
    """Aggregate vote counts for one case."""
    case_id: int
    total_votes: int
    guilty: int
    not_guilty: int

    @classmethod
    def from_tally(cls, case_id: int, tally: Tally) -> "TallyResponse":
        return cls(
            case_id=case_id,
            total_votes=tally.total_votes,
            guilty=tally.guilty,
            not_guilty=tally.not_guilty,
        )
